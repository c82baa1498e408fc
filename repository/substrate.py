# repository/substrate.py
"""
Abstract ordered key-value substrate.

The filesystem core only needs four things from its store:
get/put/delete by exact key and a lexicographic prefix listing.
Anything that provides those (a sorted in-memory map, Redis with a
lex-ordered index) can back the filesystem.

Atomicity is per key only. Nothing here groups several keys into one
transaction, and callers must not assume it.
"""

from abc import ABC, abstractmethod
from typing import List, NamedTuple, Optional, Tuple


class SubstrateKey(NamedTuple):
    tag: str
    scope: str
    path: str

    def with_path(self, path: str) -> "SubstrateKey":
        return SubstrateKey(self.tag, self.scope, path)


SubstrateItem = Tuple[SubstrateKey, bytes]


class Substrate(ABC):
    @abstractmethod
    async def get(self, key: SubstrateKey) -> Optional[bytes]:
        """Return the stored value or None."""
        ...

    @abstractmethod
    async def put(self, key: SubstrateKey, value: bytes) -> None:
        """Overwrite the value at a single key."""
        ...

    @abstractmethod
    async def delete(self, key: SubstrateKey) -> None:
        """Remove a key. Succeeds when the key is absent."""
        ...

    @abstractmethod
    async def list(self, prefix: SubstrateKey) -> List[SubstrateItem]:
        """
        Every (key, value) sharing prefix.tag and prefix.scope whose path
        starts with prefix.path, ordered by path.

        The result is a snapshot: deleting or writing keys while walking it
        does not change what is returned.
        """
        ...
