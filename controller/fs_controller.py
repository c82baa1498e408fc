# controller/fs_controller.py
from fastapi import APIRouter, Depends, Query
from core.paths import as_file_path, canonical
from model.api import (
    CopyResponse,
    DeleteResponse,
    ListResponse,
    MkdirResponse,
    MkdirRequest,
    MoveResponse,
    ReadResponse,
    StatResponse,
    TransferRequest,
    WriteRequest,
    WriteResponse,
)
from model.entry import FileEntry
from service.fs_service import FileSystemService
from util import functions
from util.constants import InternalURIs
from util.enums import ErrorMessage
from util.errors import NotFoundError
from util.types import ContentEncoding
from controller.controller_dependencies import get_fs_service, get_identity_scope

fs_router = APIRouter()


@fs_router.post(InternalURIs.FS_WRITE, response_model=WriteResponse)
async def write_file(
    payload: WriteRequest,
    scope: str = Depends(get_identity_scope),
    service: FileSystemService = Depends(get_fs_service),
) -> WriteResponse:
    data = functions.decode_content(payload.content, payload.encoding)
    return await service.write(scope, payload.path, data)


@fs_router.get(InternalURIs.FS_READ, response_model=ReadResponse)
async def read_file(
    path: str = Query(..., min_length=1),
    encoding: ContentEncoding = Query("utf8"),
    scope: str = Depends(get_identity_scope),
    service: FileSystemService = Depends(get_fs_service),
) -> ReadResponse:
    entry = await service.read(scope, path)
    return ReadResponse(
        path=as_file_path(path),
        size=entry.size,
        created_at=entry.created_at,
        modified_at=entry.modified_at,
        encoding=encoding,
        content=functions.encode_content(entry.content, encoding),
    )


@fs_router.post(InternalURIs.FS_MKDIR, response_model=MkdirResponse)
async def make_dir(
    payload: MkdirRequest,
    scope: str = Depends(get_identity_scope),
    service: FileSystemService = Depends(get_fs_service),
) -> MkdirResponse:
    return await service.mkdir(scope, payload.path)


@fs_router.post(InternalURIs.FS_COPY, response_model=CopyResponse)
async def copy_entry(
    payload: TransferRequest,
    scope: str = Depends(get_identity_scope),
    service: FileSystemService = Depends(get_fs_service),
) -> CopyResponse:
    return await service.copy(scope, payload.src, payload.dest)


@fs_router.post(InternalURIs.FS_MOVE, response_model=MoveResponse)
async def move_entry(
    payload: TransferRequest,
    scope: str = Depends(get_identity_scope),
    service: FileSystemService = Depends(get_fs_service),
) -> MoveResponse:
    return await service.move(scope, payload.src, payload.dest)


@fs_router.delete(InternalURIs.FS_DELETE, response_model=DeleteResponse)
async def delete_entry(
    path: str = Query(..., min_length=1),
    scope: str = Depends(get_identity_scope),
    service: FileSystemService = Depends(get_fs_service),
) -> DeleteResponse:
    return await service.delete(scope, path)


@fs_router.get(InternalURIs.FS_LIST, response_model=ListResponse)
async def list_dir(
    path: str = Query("/"),
    scope: str = Depends(get_identity_scope),
    service: FileSystemService = Depends(get_fs_service),
) -> ListResponse:
    dp, items = await service.list_dir(scope, path)
    return ListResponse(path=dp, items=items)


@fs_router.get(InternalURIs.FS_STAT, response_model=StatResponse)
async def stat_entry(
    path: str = Query(..., min_length=1),
    scope: str = Depends(get_identity_scope),
    service: FileSystemService = Depends(get_fs_service),
) -> StatResponse:
    entry = await service.stat(scope, path)
    if entry is None:
        raise NotFoundError.of(ErrorMessage.ENTRY_NOT_FOUND)
    return StatResponse(
        path=canonical(path),
        kind=entry.kind,
        size=entry.size if isinstance(entry, FileEntry) else None,
        created_at=entry.created_at,
        modified_at=entry.modified_at,
    )
