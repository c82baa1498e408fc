# util/enums.py
from enum import Enum
from typing import NamedTuple
from fastapi import status


class Color(str, Enum):
    RESET = "\033[0m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    MAGENTA = "\033[35m"
    CYAN = "\033[36m"
    BOLD = "\033[1m"

    def __str__(self):
        return self.value


class Environment(str, Enum):
    DEV = "dev"
    PROD = "prod"


class StorageBackend(str, Enum):
    REDIS = "redis"
    MEMORY = "memory"


class ErrorInfo(NamedTuple):
    message: str
    http_status: int


class ErrorMessage(Enum):
    PATH_REQUIRED = ErrorInfo("path is required", status.HTTP_400_BAD_REQUEST)
    SRC_DEST_REQUIRED = ErrorInfo(
        "src and dest are required", status.HTTP_400_BAD_REQUEST
    )
    CANNOT_WRITE_ROOT = ErrorInfo("Cannot write to root", status.HTTP_400_BAD_REQUEST)
    DECODE_FAILED = ErrorInfo("Failed to decode content", status.HTTP_400_BAD_REQUEST)
    CONTENT_TOO_LARGE = ErrorInfo("Content too large", status.HTTP_400_BAD_REQUEST)
    FILE_NOT_FOUND = ErrorInfo("File not found", status.HTTP_404_NOT_FOUND)
    SOURCE_NOT_FOUND = ErrorInfo("Source not found", status.HTTP_404_NOT_FOUND)
    ENTRY_NOT_FOUND = ErrorInfo("Entry not found", status.HTTP_404_NOT_FOUND)
    MOVE_ONTO_SELF = ErrorInfo(
        "Cannot move a path onto itself or into its own subtree",
        status.HTTP_400_BAD_REQUEST,
    )
    SUBSTRATE_ERROR = ErrorInfo("Storage unavailable", status.HTTP_502_BAD_GATEWAY)
