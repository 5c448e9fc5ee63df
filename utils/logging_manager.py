"""
统一的日志管理模块
整合基础日志配置和高级日志功能
"""

import asyncio
import logging
import sys
import time
import functools
import threading
from pathlib import Path
from logging.handlers import RotatingFileHandler, TimedRotatingFileHandler
from typing import Optional, Dict, Any, Callable
from dataclasses import dataclass

from .exceptions import QuoteServerError, ErrorCodes
from .config_manager import config_manager
from .path_utils import LOG_DIR, resolve_project_path

# 获取 logging_manager 模块的专用日志器
logger = logging.getLogger("LoggingManager")


@dataclass
class LogConfig:
    """日志配置"""
    level: str = "INFO"
    format: str = "[%(levelname)s][%(asctime)s][%(filename)s:%(lineno)d] - %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"
    file_max_bytes: int = 10 * 1024 * 1024  # 10MB
    file_backup_count: int = 5
    enable_console: bool = True
    enable_file: bool = True
    log_directory: Optional[str] = None
    log_filename: str = "sys.log"
    rotation_type: str = "size"  # "size" or "time"


class LoggingManager:
    """统一的日志管理器"""

    _instance = None
    _lock = threading.Lock()

    def __new__(cls):
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if hasattr(self, '_initialized'):
            return

        self._initialized = True
        self._loggers: Dict[str, logging.Logger] = {}
        self._config = LogConfig()
        self._slow_operation_threshold = 1.0
        self._performance_enabled = True

    def configure(self, config: LogConfig = None):
        """配置日志系统"""
        if config:
            self._config = config

        if self._config.log_directory is None:
            self._config.log_directory = str(LOG_DIR)

        root_logger = logging.getLogger()
        root_logger.setLevel(getattr(logging, self._config.level.upper()))

        # 清除现有处理器
        self._clear_handlers(root_logger)

        if self._config.enable_console:
            self._add_console_handler(root_logger)

        if self._config.enable_file:
            Path(self._config.log_directory).mkdir(parents=True, exist_ok=True)
            self._add_file_handler(root_logger)

    def configure_from_config_file(self, config=None):
        """从配置文件加载日志配置"""
        try:
            logging_config = (config or config_manager).get_logging_config()
            rotation_config = logging_config.file_config.rotation or {}

            log_config = LogConfig(
                level=logging_config.level,
                format=logging_config.format,
                date_format=logging_config.date_format,
                file_max_bytes=rotation_config.get('max_bytes_mb', 10) * 1024 * 1024,
                file_backup_count=rotation_config.get('backup_count', 5),
                enable_console=logging_config.console_config.enabled,
                enable_file=logging_config.file_config.enabled,
                log_directory=str(resolve_project_path(logging_config.file_config.directory)),
                log_filename=logging_config.file_config.filename,
                rotation_type=rotation_config.get('type', 'size')
            )

            self.configure(log_config)

            # 配置模块特定的日志级别
            self._configure_module_loggers(logging_config.modules)
            self._performance_enabled = logging_config.performance_monitoring.enabled
            self._slow_operation_threshold = logging_config.performance_monitoring.slow_operation_threshold

            return logging_config

        except Exception as e:
            raise QuoteServerError(
                f"Failed to configure logging from config file: {str(e)}",
                ErrorCodes.CONFIG_INVALID_FORMAT
            ) from e

    def _configure_module_loggers(self, modules_config: Dict[str, Any]):
        """配置模块特定的日志器"""
        for module_name, module_config in modules_config.items():
            module_logger = self.get_logger(module_name)
            if module_config.enabled:
                module_logger.setLevel(getattr(logging, module_config.level.upper()))
            else:
                # 禁用的模块只输出 CRITICAL
                module_logger.setLevel(logging.CRITICAL)

    def _clear_handlers(self, logger: logging.Logger):
        """清除现有处理器"""
        for handler in logger.handlers[:]:
            handler.close()
            logger.removeHandler(handler)

    def _add_console_handler(self, logger: logging.Logger):
        """添加控制台处理器"""
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(logging.Formatter(
            self._config.format,
            datefmt=self._config.date_format
        ))
        logger.addHandler(console_handler)

    def _add_file_handler(self, logger: logging.Logger):
        """添加文件处理器"""
        log_file_path = Path(self._config.log_directory) / self._config.log_filename

        if self._config.rotation_type == "size":
            file_handler = RotatingFileHandler(
                filename=log_file_path,
                maxBytes=self._config.file_max_bytes,
                backupCount=self._config.file_backup_count,
                encoding="utf-8"
            )
        else:  # time rotation
            file_handler = TimedRotatingFileHandler(
                filename=log_file_path,
                when="midnight",
                interval=1,
                backupCount=self._config.file_backup_count,
                encoding="utf-8"
            )

        file_handler.setFormatter(logging.Formatter(
            self._config.format,
            datefmt=self._config.date_format
        ))
        logger.addHandler(file_handler)

    def get_logger(self, name: str = None) -> logging.Logger:
        """获取日志记录器"""
        if name is None:
            name = "quoteserver"

        if name not in self._loggers:
            self._loggers[name] = logging.getLogger(name)

        return self._loggers[name]

    def set_level(self, level: str, logger_name: str = None):
        """设置日志级别"""
        log_level = getattr(logging, level.upper(), logging.INFO)

        if logger_name:
            self.get_logger(logger_name).setLevel(log_level)
        else:
            logging.getLogger().setLevel(log_level)

    @property
    def slow_operation_threshold(self) -> float:
        return self._slow_operation_threshold

    @property
    def performance_enabled(self) -> bool:
        return self._performance_enabled


def log_performance(module: str, threshold: Optional[float] = None):
    """性能监控日志装饰器"""
    def decorator(func: Callable) -> Callable:
        def _report(duration: float):
            if not logging_manager.performance_enabled:
                return
            limit = threshold if threshold is not None else logging_manager.slow_operation_threshold
            module_logger = logging_manager.get_logger(module)

            if duration > limit:
                module_logger.warning(f"[{module}] Slow operation: {func.__name__} took {duration:.2f}s")
            else:
                module_logger.debug(f"[{module}] {func.__name__} completed in {duration:.3f}s")

        @functools.wraps(func)
        def sync_wrapper(*args, **kwargs):
            start_time = time.time()
            try:
                return func(*args, **kwargs)
            finally:
                _report(time.time() - start_time)

        @functools.wraps(func)
        async def async_wrapper(*args, **kwargs):
            start_time = time.time()
            try:
                return await func(*args, **kwargs)
            finally:
                _report(time.time() - start_time)

        # 判断函数是否为协程函数
        if asyncio.iscoroutinefunction(func):
            return async_wrapper
        return sync_wrapper

    return decorator


# 全局日志管理器实例
logging_manager = LoggingManager()

# 兼容性：保持原有的 logger 接口
logger = logging_manager.get_logger()


class ModuleLoggers:
    """模块专用日志器集合"""

    API = logging_manager.get_logger("API")
    Server = logging_manager.get_logger("Server")
    Renderer = logging_manager.get_logger("Renderer")
    QuoteStore = logging_manager.get_logger("QuoteStore")
    Config = logging_manager.get_logger("Config")

    @classmethod
    def get_logger(cls, module_name: str):
        """获取指定模块的日志器"""
        return logging_manager.get_logger(module_name)


# 便捷的模块日志器别名
api_logger = ModuleLoggers.API
server_logger = ModuleLoggers.Server
renderer_logger = ModuleLoggers.Renderer
store_logger = ModuleLoggers.QuoteStore
config_logger = ModuleLoggers.Config


def initialize_logging(use_config_file: bool = True, config=None):
    """初始化日志系统"""
    try:
        if use_config_file:
            logging_config = logging_manager.configure_from_config_file(config)
            logger.info(f"Logging system initialized from config file (level={logging_config.level})")
        else:
            logging_manager.configure()
            logger.info("Logging system initialized with default config")
        return True

    except Exception as e:
        print(f"Failed to initialize logging: {e}")
        # 如果配置文件初始化失败，尝试使用默认配置
        if use_config_file:
            print("Falling back to default configuration...")
            try:
                logging_manager.configure(LogConfig())
                logger.info("Logging system initialized with fallback config")
                return True
            except Exception as fallback_e:
                print(f"Fallback initialization also failed: {fallback_e}")

        raise QuoteServerError(
            f"Failed to initialize logging: {str(e)}",
            ErrorCodes.CONFIG_INVALID_FORMAT
        ) from e
