"""
统一的配置管理模块
整合底层配置操作和应用层类型安全访问
"""

import json
import logging
import os
from typing import Any, Optional, Dict, List, TypeVar, Union
from dataclasses import dataclass, field
from pathlib import Path

from .exceptions import ConfigurationError, ErrorCodes
from .path_utils import resolve_config_dir

# 获取配置专用日志器
config_logger = logging.getLogger("Config")

# 为泛型类型定义一个TypeVar
T = TypeVar('T')

# 部署环境覆盖的环境变量名
ENV_API_HOST = "QUOTE_API_HOST"
ENV_API_PORT = "QUOTE_API_PORT"

# ============================================================================
# 配置数据类型定义
# ============================================================================

@dataclass
class LoggingModuleConfig:
    """模块日志配置"""
    level: str = "INFO"
    enabled: bool = True

@dataclass
class FileLoggingConfig:
    """文件日志配置"""
    enabled: bool = True
    directory: str = "log"
    filename: str = "sys.log"
    rotation: Optional[Dict[str, Any]] = None

@dataclass
class ConsoleLoggingConfig:
    """控制台日志配置"""
    enabled: bool = True

@dataclass
class LoggingConfig:
    """完整日志配置"""
    level: str = "INFO"
    format: str = "[%(levelname)s][%(asctime)s][%(filename)s:%(lineno)d] - %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"
    file_config: FileLoggingConfig = field(default_factory=FileLoggingConfig)
    console_config: ConsoleLoggingConfig = field(default_factory=ConsoleLoggingConfig)
    modules: Dict[str, LoggingModuleConfig] = field(default_factory=dict)

@dataclass
class ApiConfig:
    """API配置"""
    host: str = "0.0.0.0"
    port: int = 8080
    workers: int = 1
    reload: bool = False
    health_path: Optional[str] = None
    docs_enabled: bool = False

@dataclass
class QuoteConfig:
    """语录配置，quotes 为 None 时使用内置目录"""
    quotes: Optional[List[str]] = None
    seed: Optional[int] = None


# ============================================================================
# 统一配置管理器
# ============================================================================

class UnifiedConfigManager:
    """统一配置管理器 - 整合底层操作和应用层抽象"""

    def __init__(self, config_dir: Union[str, Path]):
        self._config_dir = Path(config_dir)
        self._config_data: Dict[str, Any] = {}

        # 类型化配置缓存
        self._typed_cache: Dict[str, Any] = {}

        # 初始化配置
        self._load_config()

    @property
    def config_dir(self) -> Path:
        return self._config_dir

    def _load_config(self) -> None:
        """加载配置目录下的全部 JSON 文件并合并"""
        merged_config = {}
        config_logger.info(f"Loading configuration from directory: {self._config_dir}")

        if not self._config_dir.is_dir():
            raise ConfigurationError(
                f"Configuration path is not a directory: {self._config_dir}",
                ErrorCodes.CONFIG_NOT_FOUND
            )

        # 按文件名排序加载，确保加载顺序一致
        config_files = sorted(self._config_dir.glob('*.json'))
        if not config_files:
            raise ConfigurationError(
                f"No configuration files (.json) found in: {self._config_dir}",
                ErrorCodes.CONFIG_NOT_FOUND
            )

        for config_file in config_files:
            try:
                with open(config_file, 'r', encoding='utf-8') as f:
                    data = json.load(f)
            except json.JSONDecodeError as e:
                raise ConfigurationError(
                    f"Invalid JSON in configuration file {config_file.name}: {e}",
                    ErrorCodes.CONFIG_INVALID_FORMAT
                ) from e
            except OSError as e:
                raise ConfigurationError(
                    f"Failed to read configuration file {config_file.name}: {e}",
                    ErrorCodes.CONFIG_LOAD_ERROR
                ) from e

            if not isinstance(data, dict):
                raise ConfigurationError(
                    f"Configuration file {config_file.name} must contain a JSON object",
                    ErrorCodes.CONFIG_INVALID_FORMAT
                )
            merged_config.update(data)
            config_logger.debug(f"Loaded and merged: {config_file.name}")

        self._config_data = merged_config
        config_logger.info(f"Configuration loaded and merged from {len(config_files)} files.")
        # 清除类型化缓存
        self._typed_cache.clear()

    def get_nested(self, path: str, default: Optional[T] = None) -> Optional[T]:
        """获取嵌套配置值，支持点分隔路径"""
        keys = path.split('.')
        current = self._config_data

        for key in keys:
            if isinstance(current, dict) and key in current:
                current = current[key]
            else:
                return default

        return current

    # ========================================================================
    # 类型安全访问方法
    # ========================================================================

    def get_logging_config(self) -> LoggingConfig:
        """获取日志配置（类型安全）"""
        if 'logging_config' not in self._typed_cache:
            try:
                logging_data = self.get_nested('logging_config', {})

                # 解析文件日志配置
                file_data = logging_data.get('file_config', {})
                file_config = FileLoggingConfig(
                    enabled=file_data.get('enabled', True),
                    directory=file_data.get('directory', 'log'),
                    filename=file_data.get('filename', 'sys.log'),
                    rotation=file_data.get('rotation')
                )

                # 解析控制台日志配置
                console_data = logging_data.get('console_config', {})
                console_config = ConsoleLoggingConfig(
                    enabled=console_data.get('enabled', True)
                )

                # 解析模块配置
                modules = {}
                for module_name, module_data in logging_data.get('modules', {}).items():
                    modules[module_name] = LoggingModuleConfig(
                        level=module_data.get('level', 'INFO'),
                        enabled=module_data.get('enabled', True)
                    )

                self._typed_cache['logging_config'] = LoggingConfig(
                    level=logging_data.get('level', 'INFO'),
                    format=logging_data.get('format', LoggingConfig.format),
                    date_format=logging_data.get('date_format', LoggingConfig.date_format),
                    file_config=file_config,
                    console_config=console_config,
                    modules=modules
                )
            except (AttributeError, TypeError) as e:
                config_logger.error(f"Failed to parse logging config: {e}")
                self._typed_cache['logging_config'] = LoggingConfig()

        return self._typed_cache['logging_config']

    def get_api_config(self) -> ApiConfig:
        """获取API配置（类型安全），环境变量优先于配置文件"""
        if 'api_config' not in self._typed_cache:
            api_data = self.get_nested('api_config', {})

            host = os.environ.get(ENV_API_HOST) or api_data.get('host', '0.0.0.0')
            port = os.environ.get(ENV_API_PORT) or api_data.get('port', 8080)
            try:
                port = int(port)
            except (TypeError, ValueError) as e:
                raise ConfigurationError(
                    f"Invalid API port: {port!r}",
                    ErrorCodes.CONFIG_INVALID_FORMAT,
                    context={'port': port}
                ) from e
            if not 0 < port < 65536:
                raise ConfigurationError(
                    f"API port out of range: {port}",
                    ErrorCodes.CONFIG_INVALID_FORMAT,
                    context={'port': port}
                )

            workers = api_data.get('workers', 1)
            if isinstance(workers, bool) or not isinstance(workers, int) or workers < 1:
                raise ConfigurationError(
                    f"api_config.workers must be a positive integer, got {workers!r}",
                    ErrorCodes.CONFIG_INVALID_FORMAT,
                    context={'workers': workers}
                )

            self._typed_cache['api_config'] = ApiConfig(
                host=host,
                port=port,
                workers=workers,
                reload=api_data.get('reload', False),
                health_path=api_data.get('health_path'),
                docs_enabled=api_data.get('docs_enabled', False)
            )

        return self._typed_cache['api_config']

    def get_quote_config(self) -> QuoteConfig:
        """获取语录配置（类型安全）"""
        if 'quote_config' not in self._typed_cache:
            quote_data = self.get_nested('quote_config', {})
            if not isinstance(quote_data, dict):
                raise ConfigurationError(
                    "quote_config must be a JSON object",
                    ErrorCodes.CONFIG_INVALID_FORMAT
                )

            quotes = quote_data.get('quotes')
            if quotes is not None and not isinstance(quotes, list):
                raise ConfigurationError(
                    "quote_config.quotes must be a list of strings",
                    ErrorCodes.CONFIG_INVALID_FORMAT
                )

            seed = quote_data.get('seed')
            if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int)):
                raise ConfigurationError(
                    f"quote_config.seed must be an integer or null, got {seed!r}",
                    ErrorCodes.CONFIG_INVALID_FORMAT
                )

            self._typed_cache['quote_config'] = QuoteConfig(quotes=quotes, seed=seed)

        return self._typed_cache['quote_config']

    def to_dict(self) -> Dict[str, Any]:
        """返回配置数据的字典副本"""
        return self._config_data.copy()


# ============================================================================
# 按配置目录缓存的管理器实例
# ============================================================================

_managers: Dict[Path, UnifiedConfigManager] = {}


def get_config_manager() -> UnifiedConfigManager:
    """返回当前配置目录对应的管理器，首次调用时才加载；加载失败不缓存"""
    config_dir = resolve_config_dir().resolve()
    manager = _managers.get(config_dir)
    if manager is None:
        manager = UnifiedConfigManager(config_dir)
        _managers[config_dir] = manager
    return manager
