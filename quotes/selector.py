"""
Random quote selection.
One generator per process, seeded once and shared behind a lock.
"""

import random
import threading
from typing import Optional

from utils import quote_logger

from .catalog import QuoteCatalog


class QuoteSelector:
    """从目录中均匀随机选取语录"""

    def __init__(self, catalog: QuoteCatalog, seed: Optional[int] = None):
        if not isinstance(catalog, QuoteCatalog):
            catalog = QuoteCatalog(catalog)

        self._catalog = catalog
        # seed 为 None 时 random.Random 使用系统熵源
        self._random = random.Random(seed)
        self._lock = threading.Lock()
        self._draws = 0

        seed_info = "entropy" if seed is None else seed
        quote_logger.info(f"[Quotes] Selector ready: {len(catalog)} quotes, seed={seed_info}")

    @property
    def catalog(self) -> QuoteCatalog:
        return self._catalog

    @property
    def draws(self) -> int:
        """已消耗的随机数次数"""
        return self._draws

    def choose_index(self) -> int:
        """返回 [0, len(catalog)) 内的均匀随机下标"""
        with self._lock:
            index = self._random.randrange(len(self._catalog))
            self._draws += 1
        return index

    def choose(self) -> str:
        """随机选取一条语录"""
        return self._catalog[self.choose_index()]
