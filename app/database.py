from collections.abc import MutableMapping
from typing import Generic, TypeVar

K = TypeVar("K")
V = TypeVar("V")
T = TypeVar("T")


class InMemoryKeyValueDatabase(Generic[K, V]):
    """
    Simple in-memory key/value database.
    """

    def __init__(self) -> None:
        self._store: MutableMapping[K, V] = {}

    def put(self, key: K, value: V) -> None:
        self._store[key] = value

    def get(self, key: K) -> V | None:
        return self._store.get(key)

    def of_type(self, cls: type[T]) -> list[T]:
        return [v for v in self._store.values() if isinstance(v, cls)]

    def put_if_absent(self, key: K, value: V) -> bool:
        """
        Store value only if nothing is stored under key yet.
        Returns True if it was stored, False if the key was taken.
        """
        # no awaits between the check and the write
        if key in self._store:
            return False
        self._store[key] = value
        return True
