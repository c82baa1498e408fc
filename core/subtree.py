# core/subtree.py
"""
Directory-shaped operations built from prefix scans.

There is no tree index: a directory's subtree is every key whose path
starts with the directory path. Each operation below is a plain sequence
of single-key substrate calls.

- No step is transactional. A failure halfway through a delete or copy
  leaves whatever was already done in place and propagates the error.
- Concurrent callers can interleave freely: a listing may see a subtree
  mid-deletion, and a write under a directory being deleted can bring its
  marker back.
"""

import locale
import logging
from dataclasses import dataclass
from typing import Dict, List, Tuple
from core.files import write_file
from core.lookup import resolve
from core.materializer import ensure_dir
from core.paths import (
    ROOT,
    SEP,
    as_dir_path,
    as_file_path,
    base_name,
    is_dir_path,
)
from model.api import ChildSummary
from model.entry import DirEntry, FileEntry
from repository.entry_repository import EntryRepository
from util.enums import ErrorMessage
from util.errors import NotFoundError, UsageError
from util.types import EntryKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeleteOutcome:
    path: str
    removed_children: int


@dataclass(frozen=True)
class CopyOutcome:
    from_path: str
    to_path: str


def name_sort_key(name: str) -> Tuple[str, str]:
    """
    Case-insensitive collation key under the process LC_COLLATE, with the
    raw name as tiebreak so the order is total.
    """
    folded = name.casefold()
    # strxfrm rejects embedded NULs, which the normalizer lets through
    return locale.strxfrm(folded.replace("\x00", "")), name


async def list_children(
    entries: EntryRepository, scope: str, path: str
) -> Tuple[str, List[ChildSummary]]:
    """
    Immediate children of a directory, sorted by name.
    Listing a directory that does not exist yet creates its marker.
    """
    dp = as_dir_path(path)
    await ensure_dir(entries, scope, dp)

    # Synthesized child path -> kind inferred from the scan
    seen: Dict[str, EntryKind] = {}
    for full, _ in await entries.scan(scope, dp):
        rel = full[len(dp):]
        if not rel:
            continue
        first, sep, _ = rel.partition(SEP)
        if not first:
            continue
        child = dp + first + (SEP if sep else "")
        if child not in seen:
            seen[child] = "dir" if sep else "file"

    items: List[ChildSummary] = []
    for child, guessed in seen.items():
        entry = await entries.get(scope, child)
        name = base_name(child)
        if isinstance(entry, FileEntry):
            items.append(
                ChildSummary(
                    name=name,
                    path=child,
                    kind="file",
                    size=entry.size,
                    modified_at=entry.modified_at,
                    created_at=entry.created_at,
                )
            )
        elif isinstance(entry, DirEntry):
            items.append(
                ChildSummary(
                    name=name,
                    path=child,
                    kind="dir",
                    size=0,
                    modified_at=entry.modified_at,
                    created_at=entry.created_at,
                )
            )
        else:
            # Orphaned descendants: no marker, only the inferred kind
            items.append(ChildSummary(name=name, path=child, kind=guessed))

    items.sort(key=lambda c: name_sort_key(c.name))
    return dp, items


async def delete_tree(
    entries: EntryRepository, scope: str, path: str
) -> DeleteOutcome:
    """
    A file-form path naming an existing file deletes that key alone.
    Anything else is deleted as a directory: every key under the prefix,
    one by one, then the marker.
    """
    if not is_dir_path(path):
        fp = as_file_path(path)
        if fp != ROOT and isinstance(await entries.get(scope, fp), FileEntry):
            await entries.delete(scope, fp)
            return DeleteOutcome(path=fp, removed_children=0)

    dp = as_dir_path(path)
    removed = 0
    for key, _ in await entries.scan(scope, dp):
        if key == dp:
            continue
        await entries.delete(scope, key)
        removed += 1
    await entries.delete(scope, dp)
    return DeleteOutcome(path=dp, removed_children=removed)


async def copy_tree(
    entries: EntryRepository, scope: str, src: str, dest: str
) -> CopyOutcome:
    found = await resolve(entries, scope, src)
    if found is None:
        raise NotFoundError.of(ErrorMessage.SOURCE_NOT_FOUND)
    src_path, entry = found

    if isinstance(entry, DirEntry):
        dd = as_dir_path(dest)
        # Scan is taken before any write, so copying into our own subtree terminates
        subtree = await entries.scan(scope, src_path)
        await ensure_dir(entries, scope, dd)
        for key, value in subtree:
            target = dd + key[len(src_path):]
            if isinstance(value, DirEntry):
                await ensure_dir(entries, scope, target)
            elif isinstance(value, FileEntry):
                await write_file(entries, scope, target, value.content)
        logger.debug(
            "copy.tree scope=%s from=%s to=%s", scope, src_path, dd
        )
        return CopyOutcome(from_path=src_path, to_path=dd)

    target = _file_target(src_path, dest)
    if is_dir_path(dest):
        await ensure_dir(entries, scope, as_dir_path(dest))
    await write_file(entries, scope, target, entry.content)
    return CopyOutcome(from_path=src_path, to_path=target)


def _file_target(src_path: str, dest: str) -> str:
    # A directory-form dest keeps the source's base name
    if is_dir_path(dest):
        return as_file_path(as_dir_path(dest) + base_name(src_path))
    return as_file_path(dest)


async def move_tree(
    entries: EntryRepository, scope: str, src: str, dest: str
) -> CopyOutcome:
    """
    copy then delete; not atomic. A failed copy skips the delete. A failed
    delete leaves both source and destination populated.

    A destination equal to the source, or inside a source directory, is
    rejected before anything is written: the delete would remove the copy.
    """
    found = await resolve(entries, scope, src)
    if found is not None:
        src_path, entry = found
        if isinstance(entry, DirEntry):
            clash = as_dir_path(dest).startswith(src_path)
        else:
            clash = _file_target(src_path, dest) == src_path
        if clash:
            logger.warning(
                "move.onto_self scope=%s from=%s to=%s", scope, src_path, dest
            )
            raise UsageError.of(ErrorMessage.MOVE_ONTO_SELF)

    copied = await copy_tree(entries, scope, src, dest)
    await delete_tree(entries, scope, copied.from_path)
    return copied
