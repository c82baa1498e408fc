# util/types.py
from typing import Literal


EntryKind = Literal["file", "dir"]

# Flow: wire encodings for file content in JSON bodies.
ContentEncoding = Literal["utf8", "base64"]
