"""
Domain entity: the bounded selection of ticker symbols for one report.
Zero external dependencies: pure Python only.

The set is owned by the session (CLI invocation, HTTP request, UI) and is
mutated only through add()/remove(), which keep it deduplicated and capped
at MAX_TICKERS.  Capacity and duplicates are policy, never errors.
"""

from typing import Iterable, Iterator

MAX_TICKERS = 3


def normalize_ticker(raw: str | None) -> str:
    """Uppercase and trim a user-supplied symbol.  Blank input yields ''."""
    if not raw:
        return ""
    return raw.strip().upper()


class TickerSet:
    """Ordered, unique, capacity-bounded collection of ticker symbols."""

    def __init__(self, capacity: int = MAX_TICKERS) -> None:
        self._capacity = capacity
        self._symbols: list[str] = []

    @classmethod
    def from_symbols(cls, symbols: Iterable[str], capacity: int = MAX_TICKERS) -> "TickerSet":
        """Build a set by adding each symbol in order; surplus and duplicates are dropped."""
        ticker_set = cls(capacity=capacity)
        for symbol in symbols:
            ticker_set.add(symbol)
        return ticker_set

    def add(self, symbol: str | None) -> bool:
        """Normalize and append *symbol*.

        Returns:
            True if the symbol was inserted; False when it was blank, already
            present, or the set is full.
        """
        ticker = normalize_ticker(symbol)
        if not ticker or ticker in self._symbols or self.is_full:
            return False
        self._symbols.append(ticker)
        return True

    def remove(self, symbol: str) -> bool:
        """Remove an exact match of *symbol*; returns whether anything was removed."""
        if symbol not in self._symbols:
            return False
        self._symbols.remove(symbol)
        return True

    def clear(self) -> None:
        self._symbols.clear()

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def symbols(self) -> tuple[str, ...]:
        return tuple(self._symbols)

    @property
    def is_full(self) -> bool:
        return len(self._symbols) >= self._capacity

    @property
    def is_empty(self) -> bool:
        return not self._symbols

    def __len__(self) -> int:
        return len(self._symbols)

    def __iter__(self) -> Iterator[str]:
        return iter(tuple(self._symbols))

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._symbols

    def __repr__(self) -> str:
        return f"TickerSet({list(self._symbols)!r})"
