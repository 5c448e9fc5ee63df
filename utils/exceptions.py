"""
统一异常定义模块
提供项目特定的异常类和错误处理机制
"""

from typing import Optional, Dict, Any


class QuoteServerError(Exception):
    """名言服务基础异常类"""

    def __init__(self, message: str, error_code: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.context = context or {}

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


class ConfigurationError(QuoteServerError):
    """配置相关错误"""
    pass


class QuoteStoreError(QuoteServerError):
    """名言列表加载错误"""
    pass


class TemplateError(QuoteServerError):
    """HTML模板渲染错误"""
    pass


class HostnameResolutionError(QuoteServerError):
    """主机名解析错误"""
    pass


class ServerStartupError(QuoteServerError):
    """服务启动错误"""
    pass


# 错误代码常量
class ErrorCodes:
    """错误代码常量"""

    # 配置错误
    CONFIG_NOT_FOUND = "CONFIG_001"
    CONFIG_INVALID_FORMAT = "CONFIG_002"
    CONFIG_LOAD_ERROR = "CONFIG_003"

    # 资源错误
    QUOTES_NOT_FOUND = "RES_001"
    QUOTES_EMPTY = "RES_002"

    # 渲染错误
    TEMPLATE_MISSING_ELEMENT = "RENDER_001"
    HOSTNAME_UNRESOLVED = "RENDER_002"

    # 服务错误
    SERVER_BIND_FAILED = "SRV_001"
    SERVER_STARTUP_FAILED = "SRV_002"


def create_error_response(error: QuoteServerError,
                          include_traceback: bool = False) -> Dict[str, Any]:
    """创建标准化的错误响应"""
    response = {
        "error": True,
        "error_code": error.error_code,
        "message": error.message,
        "context": error.context
    }

    if include_traceback:
        import traceback
        response["traceback"] = traceback.format_exc()

    return response
