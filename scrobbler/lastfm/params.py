from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, MutableMapping


class ParameterSet(MutableMapping[str, str]):
    """Request parameters kept in ascending key order.

    Iteration order is by key, never by insertion, so two sets holding the
    same pairs always encode and sign identically.
    """

    __slots__ = ("_data",)

    def __init__(self, pairs: Mapping[str, str] | Iterable[tuple[str, str]] | None = None):
        self._data: dict[str, str] = {}
        if pairs is not None:
            self.update(pairs)

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, str]]) -> ParameterSet:
        return cls(pairs)

    def set(self, key: str, value: str) -> None:
        """Set a parameter, overwriting any previous value."""
        self[key] = value

    def __setitem__(self, key: str, value: str) -> None:
        if not isinstance(key, str) or not isinstance(value, str):
            raise TypeError(f"parameter keys and values must be str, got {type(key).__name__}={type(value).__name__}")
        self._data[key] = value

    def __getitem__(self, key: str) -> str:
        return self._data[key]

    def __delitem__(self, key: str) -> None:
        del self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._data))

    def __len__(self) -> int:
        return len(self._data)

    def copy(self) -> ParameterSet:
        return ParameterSet(self._data)

    def __repr__(self) -> str:
        inner = ", ".join(f"{k!r}: {v!r}" for k, v in self.items())
        return f"ParameterSet({{{inner}}})"
