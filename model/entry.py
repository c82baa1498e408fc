# model/entry.py
from typing import Annotated, Literal, Union
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class FileEntry(BaseModel):
    # Content travels as base64 inside the stored JSON.
    model_config = ConfigDict(ser_json_bytes="base64", val_json_bytes="base64")

    kind: Literal["file"] = "file"
    created_at: int
    modified_at: int
    size: int
    content: bytes


class DirEntry(BaseModel):
    kind: Literal["dir"] = "dir"
    created_at: int
    modified_at: int


Entry = Annotated[Union[FileEntry, DirEntry], Field(discriminator="kind")]

EntryAdapter: TypeAdapter[Entry] = TypeAdapter(Entry)
