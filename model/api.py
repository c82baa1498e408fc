# model/api.py
from pydantic import BaseModel, ConfigDict, Field
from util.types import ContentEncoding, EntryKind


class ApiModel(BaseModel):
    # Python names on our side, camelCase aliases on the wire.
    model_config = ConfigDict(populate_by_name=True)


class WriteRequest(BaseModel):
    path: str = Field(min_length=1)
    content: str
    encoding: ContentEncoding = "utf8"


class MkdirRequest(BaseModel):
    path: str = Field(min_length=1)


class TransferRequest(BaseModel):
    src: str = Field(min_length=1)
    dest: str = Field(min_length=1)


class WriteResponse(ApiModel):
    saved: bool = True
    path: str
    size: int


class ReadResponse(ApiModel):
    path: str
    size: int
    created_at: int = Field(alias="createdAt")
    modified_at: int = Field(alias="modifiedAt")
    encoding: ContentEncoding
    content: str


class MkdirResponse(ApiModel):
    created: bool = True
    path: str


class DeleteResponse(ApiModel):
    deleted: bool = True
    path: str
    removed_children: int = Field(default=0, alias="removedChildren")


class CopyResponse(ApiModel):
    copied: bool = True
    from_path: str = Field(alias="from")
    to_path: str = Field(alias="to")


class MoveResponse(ApiModel):
    moved: bool = True
    from_path: str = Field(alias="from")
    to_path: str = Field(alias="to")


class ChildSummary(ApiModel):
    name: str
    path: str
    kind: EntryKind
    size: int | None = None
    modified_at: int | None = Field(default=None, alias="modifiedAt")
    created_at: int | None = Field(default=None, alias="createdAt")


class ListResponse(ApiModel):
    path: str
    items: list[ChildSummary]


class StatResponse(ApiModel):
    path: str
    kind: EntryKind
    size: int | None = None
    created_at: int = Field(alias="createdAt")
    modified_at: int = Field(alias="modifiedAt")


class UserResponse(BaseModel):
    username: str
    authenticated: bool
