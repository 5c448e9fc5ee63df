"""
工具模块包
提供项目所需的通用工具和功能
"""

# 导出核心工具
from .config_manager import (
    config_manager,
    UnifiedConfigManager,
    LoggingConfig,
    LoggingModuleConfig,
    ServerConfig,
    ResourcesConfig
)
from .exceptions import (
    QuoteServerError,
    ConfigurationError,
    QuoteStoreError,
    TemplateError,
    HostnameResolutionError,
    ServerStartupError,
    ErrorCodes,
    create_error_response
)
from .logging_manager import (
    log_performance,
    logging_manager,
    logger,
    LogConfig,
    initialize_logging,
    ModuleLoggers,
    api_logger,
    server_logger,
    renderer_logger,
    store_logger,
    config_logger
)
from .path_utils import BASE_DIR, CONFIG_DIR, LOG_DIR, RESOURCES_DIR, resolve_project_path

# 版本信息
__version__ = "1.0.0"

__all__ = [
    # 配置管理
    "config_manager",
    "UnifiedConfigManager",
    "LoggingConfig",
    "LoggingModuleConfig",
    "ServerConfig",
    "ResourcesConfig",

    # 异常处理
    "QuoteServerError",
    "ConfigurationError",
    "QuoteStoreError",
    "TemplateError",
    "HostnameResolutionError",
    "ServerStartupError",
    "ErrorCodes",
    "create_error_response",

    # 日志工具
    "log_performance",
    "logging_manager",
    "logger",
    "LogConfig",
    "initialize_logging",
    "ModuleLoggers",
    "api_logger",
    "server_logger",
    "renderer_logger",
    "store_logger",
    "config_logger",

    # 路径工具
    "BASE_DIR",
    "CONFIG_DIR",
    "LOG_DIR",
    "RESOURCES_DIR",
    "resolve_project_path",
]
