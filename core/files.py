# core/files.py
from core.materializer import ensure_dir
from core.paths import as_dir_path, as_file_path, parent_dir_of
from model.entry import FileEntry
from repository.entry_repository import EntryRepository
from util.enums import ErrorMessage
from util.errors import NotFoundError, UsageError
from util.functions import now_ms


async def write_file(
    entries: EntryRepository, scope: str, path: str, data: bytes
) -> FileEntry:
    """
    The single write path: materialize the immediate parent, then put.
    Overwrites keep created_at and replace everything else.
    """
    fp = as_file_path(path)
    parent = parent_dir_of(fp)
    if parent is None:
        raise UsageError.of(ErrorMessage.CANNOT_WRITE_ROOT)
    await ensure_dir(entries, scope, parent)

    now = now_ms()
    previous = await entries.get(scope, fp)
    created_at = previous.created_at if isinstance(previous, FileEntry) else now
    entry = FileEntry(
        created_at=created_at,
        modified_at=now,
        size=len(data),
        content=bytes(data),
    )
    await entries.put(scope, fp, entry)
    return entry


async def read_file(entries: EntryRepository, scope: str, path: str) -> FileEntry:
    entry = await entries.get(scope, as_file_path(path))
    if not isinstance(entry, FileEntry):
        raise NotFoundError.of(ErrorMessage.FILE_NOT_FOUND)
    return entry


async def make_dir(entries: EntryRepository, scope: str, path: str) -> str:
    """Materialize the parent (one level) and the directory itself."""
    dp = as_dir_path(path)
    parent = parent_dir_of(dp)
    if parent is not None:
        await ensure_dir(entries, scope, parent)
    await ensure_dir(entries, scope, dp)
    return dp
