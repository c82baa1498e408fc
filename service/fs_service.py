# service/fs_service.py
import logging
from typing import List, Optional
from config.settings import settings
from core import files, lookup, subtree
from core.paths import as_file_path
from model.api import (
    ChildSummary,
    CopyResponse,
    DeleteResponse,
    MkdirResponse,
    MoveResponse,
    WriteResponse,
)
from model.entry import Entry, FileEntry
from repository.entry_repository import EntryRepository
from util.enums import ErrorMessage
from util.errors import UsageError
from util.timing import timed

logger = logging.getLogger(__name__)


class FileSystemService:
    """
    Hierarchical filesystem over a flat, ordered key-value substrate.

    Every operation takes the caller's identity scope first; scopes never
    see each other's entries.

    Consistency contract:
      - Each substrate call is atomic for its single key, nothing more.
      - delete/copy/move over a directory are a series of independent
        single-key steps. A substrate failure stops the series where it is
        (partially deleted or partially copied) and propagates.
      - move is copy followed by delete. Both src and dest can be left
        populated if the delete fails. A move whose destination is the
        source itself, or lies inside a source directory, is a UsageError
        and touches nothing.
      - Concurrent structural operations may interleave. Do not rely on
        atomic subtree moves.
    """

    def __init__(
        self, entries: EntryRepository, max_file_bytes: int = settings.max_file_bytes
    ) -> None:
        self._entries = entries
        self._max_bytes = int(max_file_bytes)

    @staticmethod
    def _require(
        value: Optional[str], error: ErrorMessage = ErrorMessage.PATH_REQUIRED
    ) -> str:
        if not value or not isinstance(value, str):
            raise UsageError.of(error)
        return value

    async def write(self, scope: str, path: str, data: bytes) -> WriteResponse:
        self._require(path)
        if len(data) > self._max_bytes:
            logger.warning(
                "fs.write.too_large scope=%s bytes=%d max=%d",
                scope,
                len(data),
                self._max_bytes,
            )
            raise UsageError.of(ErrorMessage.CONTENT_TOO_LARGE)

        await files.write_file(self._entries, scope, path, data)
        fp = as_file_path(path)
        logger.info("fs.write.ok scope=%s path=%s bytes=%d", scope, fp, len(data))
        return WriteResponse(path=fp, size=len(data))

    async def read(self, scope: str, path: str) -> FileEntry:
        self._require(path)
        return await files.read_file(self._entries, scope, path)

    async def mkdir(self, scope: str, path: str) -> MkdirResponse:
        self._require(path)
        dp = await files.make_dir(self._entries, scope, path)
        logger.info("fs.mkdir.ok scope=%s path=%s", scope, dp)
        return MkdirResponse(path=dp)

    async def delete(self, scope: str, path: str) -> DeleteResponse:
        self._require(path)
        with timed(logger, "fs.delete", scope=scope) as fields:
            outcome = await subtree.delete_tree(self._entries, scope, path)
            fields["path"] = outcome.path
            fields["removed"] = outcome.removed_children
        return DeleteResponse(
            path=outcome.path, removed_children=outcome.removed_children
        )

    async def copy(self, scope: str, src: str, dest: str) -> CopyResponse:
        self._require(src, ErrorMessage.SRC_DEST_REQUIRED)
        self._require(dest, ErrorMessage.SRC_DEST_REQUIRED)
        with timed(logger, "fs.copy", scope=scope) as fields:
            outcome = await subtree.copy_tree(self._entries, scope, src, dest)
            fields["from"] = outcome.from_path
            fields["to"] = outcome.to_path
        return CopyResponse(from_path=outcome.from_path, to_path=outcome.to_path)

    async def move(self, scope: str, src: str, dest: str) -> MoveResponse:
        self._require(src, ErrorMessage.SRC_DEST_REQUIRED)
        self._require(dest, ErrorMessage.SRC_DEST_REQUIRED)
        with timed(logger, "fs.move", scope=scope) as fields:
            outcome = await subtree.move_tree(self._entries, scope, src, dest)
            fields["from"] = outcome.from_path
            fields["to"] = outcome.to_path
        return MoveResponse(from_path=outcome.from_path, to_path=outcome.to_path)

    async def list(self, scope: str, path: Optional[str] = None) -> List[ChildSummary]:
        _, items = await self.list_dir(scope, path)
        return items

    async def list_dir(
        self, scope: str, path: Optional[str] = None
    ) -> tuple[str, List[ChildSummary]]:
        with timed(logger, "fs.list", scope=scope) as fields:
            dp, items = await subtree.list_children(self._entries, scope, path or "/")
            fields["path"] = dp
            fields["count"] = len(items)
        return dp, items

    async def stat(self, scope: str, path: str) -> Optional[Entry]:
        self._require(path)
        return await lookup.stat(self._entries, scope, path)
