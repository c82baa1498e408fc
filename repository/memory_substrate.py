# repository/memory_substrate.py
import bisect
from typing import Dict, List, Optional
from repository.substrate import Substrate, SubstrateItem, SubstrateKey


class MemorySubstrate(Substrate):
    """
    Sorted in-process map. Used for tests and STORAGE_BACKEND=memory.

    Keys are kept in a sorted list next to the value dict; tuple ordering
    puts every (tag, scope) together and orders paths by code point, which
    matches UTF-8 byte order.
    """

    def __init__(self) -> None:
        self._values: Dict[SubstrateKey, bytes] = {}
        self._keys: List[SubstrateKey] = []

    async def get(self, key: SubstrateKey) -> Optional[bytes]:
        return self._values.get(key)

    async def put(self, key: SubstrateKey, value: bytes) -> None:
        if key not in self._values:
            bisect.insort(self._keys, key)
        self._values[key] = bytes(value)

    async def delete(self, key: SubstrateKey) -> None:
        if self._values.pop(key, None) is None:
            return
        i = bisect.bisect_left(self._keys, key)
        if i < len(self._keys) and self._keys[i] == key:
            del self._keys[i]

    async def list(self, prefix: SubstrateKey) -> List[SubstrateItem]:
        out: List[SubstrateItem] = []
        i = bisect.bisect_left(self._keys, prefix)
        while i < len(self._keys):
            key = self._keys[i]
            if key.tag != prefix.tag or key.scope != prefix.scope:
                break
            if not key.path.startswith(prefix.path):
                break
            out.append((key, self._values[key]))
            i += 1
        return out

    def __len__(self) -> int:
        return len(self._keys)
