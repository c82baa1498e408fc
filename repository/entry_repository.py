# repository/entry_repository.py
import logging
from typing import List, Optional, Tuple
from pydantic import ValidationError
from core.paths import is_dir_path
from model.entry import DirEntry, Entry, EntryAdapter
from repository.namespaces import FS
from repository.substrate import Substrate, SubstrateKey

logger = logging.getLogger(__name__)


class EntryRepository:
    """
    Maps one canonical (scope, path) to exactly one substrate key and
    (de)serializes File/Directory entries as JSON.

    Each call is a single substrate operation; there is no multi-key
    atomicity here or above.

    A stored value that does not decode as an entry is logged and treated
    as absent. Callers see it as missing: ensure_dir rewrites a corrupt
    directory marker, and a listing reports a corrupt file as an orphan.
    """

    def __init__(self, substrate: Substrate) -> None:
        self._substrate = substrate

    @staticmethod
    def _key(scope: str, path: str) -> SubstrateKey:
        return SubstrateKey(FS, scope, path)

    @staticmethod
    def _decode(path: str, raw: bytes) -> Optional[Entry]:
        try:
            return EntryAdapter.validate_json(raw)
        except ValidationError:
            # Unreadable record: report as absent rather than failing the caller
            logger.warning("entry.decode.error path=%s bytes=%d", path, len(raw))
            return None

    async def get(self, scope: str, path: str) -> Optional[Entry]:
        raw = await self._substrate.get(self._key(scope, path))
        if raw is None:
            return None
        return self._decode(path, raw)

    async def put(self, scope: str, path: str, entry: Entry) -> None:
        if is_dir_path(path) != isinstance(entry, DirEntry):
            raise ValueError(f"entry kind {entry.kind!r} does not match path {path!r}")
        payload = entry.model_dump_json().encode("utf-8")
        await self._substrate.put(self._key(scope, path), payload)

    async def delete(self, scope: str, path: str) -> None:
        await self._substrate.delete(self._key(scope, path))

    async def scan(
        self, scope: str, prefix: str
    ) -> List[Tuple[str, Optional[Entry]]]:
        items = await self._substrate.list(self._key(scope, prefix))
        return [(key.path, self._decode(key.path, raw)) for key, raw in items]
