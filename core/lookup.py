# core/lookup.py
from typing import Optional, Tuple
from core.paths import as_dir_path, canonical, is_dir_path
from model.entry import DirEntry, Entry
from repository.entry_repository import EntryRepository


async def stat(entries: EntryRepository, scope: str, path: str) -> Optional[Entry]:
    """Look up the form the trailing slash implies. No side effects."""
    return await entries.get(scope, canonical(path))


async def resolve(
    entries: EntryRepository, scope: str, path: str
) -> Optional[Tuple[str, Entry]]:
    """
    Like stat, but a slashless path with no file behind it is retried as a
    directory. Returns (canonical path, entry) or None.
    """
    cp = canonical(path)
    entry = await entries.get(scope, cp)
    if entry is not None:
        return cp, entry
    if is_dir_path(cp):
        return None
    dp = as_dir_path(cp)
    entry = await entries.get(scope, dp)
    if isinstance(entry, DirEntry):
        return dp, entry
    return None
