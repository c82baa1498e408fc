# util/functions.py
import base64
import binascii
import time
from util.enums import ErrorMessage
from util.errors import UsageError
from util.types import ContentEncoding


def decode_content(content: str, encoding: ContentEncoding = "utf8") -> bytes:
    """
    - Turn a JSON string body into raw bytes.
    - base64 input is validated strictly; anything malformed is a usage error.
    """
    if encoding == "base64":
        try:
            return base64.b64decode(content, validate=True)
        except (binascii.Error, ValueError):
            raise UsageError.of(ErrorMessage.DECODE_FAILED)
    return content.encode("utf-8")


def encode_content(data: bytes, encoding: ContentEncoding = "utf8") -> str:
    if encoding == "base64":
        return base64.b64encode(data).decode("ascii")
    return data.decode("utf-8", errors="replace")


def now_ms() -> int:
    return int(time.time() * 1000)
