"""
统一异常定义模块
提供项目特定的异常类和错误处理机制
"""

from typing import Optional, Dict, Any


class QuoteServiceError(Exception):
    """语录服务基础异常类"""

    def __init__(self, message: str, error_code: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.context = context or {}

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


class ConfigurationError(QuoteServiceError):
    """配置相关错误"""
    pass


class CatalogError(ConfigurationError):
    """语录目录错误（空目录、非法条目）"""
    pass


# 错误代码常量
class ErrorCodes:
    """错误代码常量"""

    # 配置错误
    CONFIG_NOT_FOUND = "CONFIG_001"
    CONFIG_INVALID_FORMAT = "CONFIG_002"
    CONFIG_LOAD_ERROR = "CONFIG_003"

    # 目录错误
    CATALOG_EMPTY = "CATALOG_001"
    CATALOG_INVALID_ENTRY = "CATALOG_002"

    # API错误
    API_INTERNAL_ERROR = "API_001"

