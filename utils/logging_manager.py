"""
统一的日志管理模块
整合基础日志配置、模块日志器和内存指标
"""

import logging
import sys
import os
import threading
from pathlib import Path
from logging.handlers import RotatingFileHandler, TimedRotatingFileHandler
from typing import Optional, Dict, Any
from dataclasses import dataclass
from collections import defaultdict

from .exceptions import QuoteServiceError, ErrorCodes
from .config_manager import get_config_manager
from .path_utils import LOG_DIR

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
        self._metrics = defaultdict(int)
        self._metrics_lock = threading.Lock()

    @property
    def config(self) -> LogConfig:
        return self._config

    def configure(self, config: LogConfig = None):
        """配置日志系统"""
        if config:
            self._config = config

        if self._config.log_directory is None:
            self._config.log_directory = str(LOG_DIR)

        root_logger = logging.getLogger()
        root_logger.setLevel(getattr(logging, self._config.level.upper(), logging.INFO))

        self._clear_handlers(root_logger)

        if self._config.enable_console:
            self._add_console_handler(root_logger)

        if self._config.enable_file:
            Path(self._config.log_directory).mkdir(parents=True, exist_ok=True)
            self._add_file_handler(root_logger)

    def configure_from_config_file(self):
        """从配置文件加载日志配置"""
        try:
            manager = get_config_manager()
            logging_config = manager.get_logging_config()

            # 相对路径相对于配置目录的上一级
            log_directory = logging_config.file_config.directory
            if not os.path.isabs(log_directory):
                log_directory = str(manager.config_dir.parent / log_directory)

            rotation = logging_config.file_config.rotation or {}

            config = LogConfig(
                level=logging_config.level,
                format=logging_config.format,
                date_format=logging_config.date_format,
                file_max_bytes=rotation.get('max_bytes_mb', 10) * 1024 * 1024,
                file_backup_count=rotation.get('backup_count', 5),
                enable_console=logging_config.console_config.enabled,
                enable_file=logging_config.file_config.enabled,
                log_directory=log_directory,
                log_filename=logging_config.file_config.filename,
                rotation_type=rotation.get('type', 'size')
            )

            self.configure(config)
            self._configure_module_loggers(logging_config.modules)

            return logging_config

        except (OSError, AttributeError, TypeError) as e:
            raise QuoteServiceError(
                f"Failed to configure logging from config file: {str(e)}",
                ErrorCodes.CONFIG_INVALID_FORMAT
            ) from e

    def _configure_module_loggers(self, modules_config: Dict[str, Any]):
        """配置模块特定的日志器，禁用的模块只输出 CRITICAL"""
        for module_name, module_config in modules_config.items():
            module_logger = self.get_logger(module_name)
            if module_config.enabled:
                module_logger.setLevel(getattr(logging, module_config.level.upper(), logging.INFO))
            else:
                module_logger.setLevel(logging.CRITICAL)

    def _clear_handlers(self, logger: logging.Logger):
        """清除现有处理器"""
        for handler in logger.handlers[:]:
            handler.close()
            logger.removeHandler(handler)

    def _formatter(self) -> logging.Formatter:
        return logging.Formatter(self._config.format, datefmt=self._config.date_format)

    def _add_console_handler(self, logger: logging.Logger):
        """添加控制台处理器"""
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(self._formatter())
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

        file_handler.setFormatter(self._formatter())
        logger.addHandler(file_handler)

    def get_logger(self, name: str = None) -> logging.Logger:
        """获取日志记录器"""
        if name is None:
            name = "quoteapi"

        if name not in self._loggers:
            self._loggers[name] = logging.getLogger(name)

        return self._loggers[name]

    def increment_metric(self, key: str, value: int = 1) -> int:
        with self._metrics_lock:
            self._metrics[key] += value
            return self._metrics[key]

    def get_metrics(self) -> Dict[str, int]:
        """获取日志统计指标"""
        with self._metrics_lock:
            return dict(self._metrics)


class MetricsLogger:
    """指标记录器"""

    def __init__(self, module: str):
        self.module = module

    def increment(self, metric_name: str, value: int = 1):
        """增加计数器"""
        key = f"{self.module}.{metric_name}"
        total = logging_manager.increment_metric(key, value)

        logging_manager.get_logger(self.module).debug(f"[Metrics] {key}: {total}")

    def timing(self, metric_name: str, duration: float):
        """记录时间"""
        key = f"{self.module}.{metric_name}_duration"

        logging_manager.get_logger(self.module).debug(f"[Metrics] {key}: {duration:.3f}s")


# 全局日志管理器实例
logging_manager = LoggingManager()

# 兼容性：保持原有的 logger 接口
logger = logging_manager.get_logger()

# 预定义的指标记录器实例
api_metrics = MetricsLogger("API")


class ModuleLoggers:
    """模块专用日志器集合"""

    API = logging_manager.get_logger("API")
    Quotes = logging_manager.get_logger("Quotes")
    Config = logging_manager.get_logger("Config")
    Main = logging_manager.get_logger("Main")


# 便捷的模块日志器别名
api_logger = ModuleLoggers.API
quote_logger = ModuleLoggers.Quotes
config_logger = ModuleLoggers.Config
main_logger = ModuleLoggers.Main


def initialize_logging(use_config_file: bool = True):
    """初始化日志系统"""
    try:
        if use_config_file:
            logging_config = logging_manager.configure_from_config_file()
            logger.info(
                f"Logging system initialized from config file "
                f"(level={logging_config.level}, file={logging_config.file_config.enabled}, "
                f"console={logging_config.console_config.enabled})"
            )
        else:
            logging_manager.configure()
            logger.info("Logging system initialized with default config")
        return True

    except QuoteServiceError as e:
        print(f"Failed to initialize logging: {e}", file=sys.stderr)
        if not use_config_file:
            raise

        # 配置文件初始化失败时回退到默认配置
        print("Falling back to default configuration...", file=sys.stderr)
        logging_manager.configure(LogConfig(enable_file=False))
        logger.info("Logging system initialized with fallback config")
        return True

