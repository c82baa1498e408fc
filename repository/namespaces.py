# repository/namespaces.py
from typing import Final

ROOT: Final[str] = "kvfs"

FS: Final[str] = "fs"  # substrate tag for filesystem entries
INDEX: Final[str] = "index"  # per-(tag, scope) sorted set of paths
