# controller/controller_dependencies.py
import re
from fastapi import Depends, Request
from config.storage import get_substrate
from repository.entry_repository import EntryRepository
from repository.substrate import Substrate
from service.fs_service import FileSystemService
from util.constants import ANONYMOUS_SCOPE

_BEARER = re.compile(r"^Bearer\s+(.+)$", re.IGNORECASE)


def get_identity_scope(request: Request) -> str:
    """
    Stand-in for real auth: the bearer token itself is the namespace owner,
    everyone else shares the anonymous scope.
    """
    auth = request.headers.get("authorization") or ""
    m = _BEARER.match(auth)
    if m and m.group(1).strip():
        return m.group(1).strip()
    return ANONYMOUS_SCOPE


def get_fs_service(
    substrate: Substrate = Depends(get_substrate),
) -> FileSystemService:
    _entries = EntryRepository(substrate)
    _service = FileSystemService(_entries)
    return _service
