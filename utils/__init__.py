"""
工具模块包
提供项目所需的配置、日志和异常处理
"""

# 导出核心工具
from .config_manager import (
    get_config_manager,
    UnifiedConfigManager,
    ApiConfig,
    QuoteConfig,
    LoggingConfig,
    LoggingModuleConfig
)
from .exceptions import (
    QuoteServiceError,
    ConfigurationError,
    CatalogError,
    ErrorCodes
)
from .logging_manager import (
    MetricsLogger,
    logging_manager,
    logger,
    api_metrics,
    LogConfig,
    initialize_logging,
    ModuleLoggers,
    api_logger,
    quote_logger,
    config_logger,
    main_logger
)
from .path_utils import BASE_DIR, LOG_DIR, resolve_config_dir

# 版本信息
__version__ = "1.0.0"

__all__ = [
    # 配置管理
    "get_config_manager",
    "UnifiedConfigManager",
    "ApiConfig",
    "QuoteConfig",
    "LoggingConfig",
    "LoggingModuleConfig",

    # 异常处理
    "QuoteServiceError",
    "ConfigurationError",
    "CatalogError",
    "ErrorCodes",

    # 日志工具
    "MetricsLogger",
    "logging_manager",
    "logger",
    "api_metrics",
    "LogConfig",
    "initialize_logging",
    "ModuleLoggers",
    "api_logger",
    "quote_logger",
    "config_logger",
    "main_logger",

    # 路径工具
    "BASE_DIR",
    "LOG_DIR",
    "resolve_config_dir",
]
