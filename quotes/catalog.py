"""
Quote catalog for the quote API.
An ordered, immutable, non-empty sequence of quote strings fixed at startup.
"""

from collections.abc import Sequence
from typing import Iterable, Iterator, Optional, Tuple, Union

from utils import CatalogError, ErrorCodes, QuoteConfig, quote_logger

from .defaults import DEFAULT_QUOTES


class QuoteCatalog(Sequence):
    """语录目录，构造后不可修改"""

    __slots__ = ('_quotes',)

    def __init__(self, quotes: Iterable[str]):
        if isinstance(quotes, (str, bytes)):
            raise CatalogError(
                "Quote catalog must be a sequence of strings, not a single string",
                ErrorCodes.CATALOG_INVALID_ENTRY
            )

        entries: Tuple[str, ...] = tuple(quotes)
        if not entries:
            raise CatalogError(
                "Quote catalog is empty; at least one quote is required",
                ErrorCodes.CATALOG_EMPTY
            )

        for index, entry in enumerate(entries):
            if not isinstance(entry, str):
                raise CatalogError(
                    f"Quote catalog entry {index} is not a string: {entry!r}",
                    ErrorCodes.CATALOG_INVALID_ENTRY,
                    context={'index': index, 'type': type(entry).__name__}
                )
            # 响应体以 UTF-8 编码，孤立代理项无法编码
            try:
                entry.encode("utf-8")
            except UnicodeEncodeError as e:
                raise CatalogError(
                    f"Quote catalog entry {index} is not encodable as UTF-8: {e.reason}",
                    ErrorCodes.CATALOG_INVALID_ENTRY,
                    context={'index': index, 'position': e.start}
                ) from e

        self._quotes = entries

    @classmethod
    def from_config(cls, quote_config: Optional[QuoteConfig] = None) -> "QuoteCatalog":
        """从配置构建目录，未配置 quotes 时使用内置目录"""
        if quote_config is None or quote_config.quotes is None:
            quote_logger.info(f"[Quotes] Using built-in catalog ({len(DEFAULT_QUOTES)} quotes)")
            return cls(DEFAULT_QUOTES)

        catalog = cls(quote_config.quotes)
        quote_logger.info(f"[Quotes] Loaded catalog with {len(catalog)} quotes from configuration")
        return catalog

    def __getitem__(self, index: Union[int, slice]):
        return self._quotes[index]

    def __len__(self) -> int:
        return len(self._quotes)

    def __iter__(self) -> Iterator[str]:
        return iter(self._quotes)

    def __contains__(self, item: object) -> bool:
        return item in self._quotes

    def __eq__(self, other: object) -> bool:
        if isinstance(other, QuoteCatalog):
            return self._quotes == other._quotes
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._quotes)

    def __repr__(self) -> str:
        return f"QuoteCatalog({len(self._quotes)} quotes)"
