# core/materializer.py
from model.entry import DirEntry
from core.paths import as_dir_path
from repository.entry_repository import EntryRepository
from util.functions import now_ms


async def ensure_dir(entries: EntryRepository, scope: str, path: str) -> DirEntry:
    """
    Materialize a directory marker at as_dir_path(path).
    An existing directory is returned untouched; its timestamps never move.
    Only this one level is created, never the ancestor chain.
    """
    dp = as_dir_path(path)
    existing = await entries.get(scope, dp)
    if isinstance(existing, DirEntry):
        return existing
    now = now_ms()
    created = DirEntry(created_at=now, modified_at=now)
    await entries.put(scope, dp, created)
    return created
