"""
语录模块包
提供语录目录和随机选择器
"""

from .catalog import QuoteCatalog
from .defaults import DEFAULT_QUOTES
from .selector import QuoteSelector

__all__ = [
    "QuoteCatalog",
    "QuoteSelector",
    "DEFAULT_QUOTES",
]
