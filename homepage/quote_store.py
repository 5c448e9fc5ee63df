"""
Quote store for the home page.
Holds the bundled quote list loaded once at startup and draws random quotes.
"""

import random
import threading
from pathlib import Path
from typing import Iterable, Optional, Tuple, Union

from utils import store_logger, QuoteStoreError, ErrorCodes


class QuoteStore:
    """名言列表（启动后只读）"""

    def __init__(self, quotes: Iterable[str], rng: Optional[random.Random] = None):
        self._quotes: Tuple[str, ...] = tuple(quotes)
        if not self._quotes:
            raise QuoteStoreError(
                "Quote list is empty",
                ErrorCodes.QUOTES_EMPTY
            )

        # 随机数生成器在所有请求间共享，抽取操作需加锁
        self._rng = rng or random.Random()
        self._rng_lock = threading.Lock()

    @classmethod
    def from_file(cls, path: Union[str, Path], encoding: str = "utf-8",
                  rng: Optional[random.Random] = None) -> "QuoteStore":
        """从资源文件加载名言，每行一条，忽略空行"""
        quotes_path = Path(path)
        try:
            with open(quotes_path, 'r', encoding=encoding) as f:
                quotes = [line.strip() for line in f if line.strip()]
        except FileNotFoundError as e:
            raise QuoteStoreError(
                f"Quotes resource not found: {quotes_path}",
                ErrorCodes.QUOTES_NOT_FOUND,
                context={"path": str(quotes_path)}
            ) from e

        store_logger.info(f"[QuoteStore] Loaded {len(quotes)} quotes from {quotes_path.name}")
        return cls(quotes, rng=rng)

    def size(self) -> int:
        return len(self._quotes)

    def __len__(self) -> int:
        return len(self._quotes)

    def get(self, index: int) -> str:
        """按下标获取名言"""
        if not 0 <= index < len(self._quotes):
            raise IndexError(f"Quote index {index} out of range [0, {len(self._quotes)})")
        return self._quotes[index]

    def random_index(self) -> int:
        with self._rng_lock:
            return self._rng.randrange(len(self._quotes))

    def random_quote(self) -> str:
        """均匀随机抽取一条名言"""
        return self._quotes[self.random_index()]

    @property
    def quotes(self) -> Tuple[str, ...]:
        return self._quotes
