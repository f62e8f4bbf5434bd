from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    UNKNOWN_OPTION = (1, "Unknown command line option")
    UNKNOWN_ARGUMENT = (2, "Unknown command line argument")
    MISSING_INPUT_FILE = (3, "Missing input file or texture directory")
    INVALID_VERTEX_WEIGHT = (4, "Vertex weight count must be between 0 and 8")
    INVALID_BONE_COUNT = (5, "Node part bone count must not be lower than the vertex weight count")
    INVALID_VERTEX_COUNT = (6, "Vertex count must be between 0 and 32767")
    UNKNOWN_FILETYPE = (7, "Unknown filetype")
    MANIFEST_UNREADABLE = (8, "Cannot open texture manifest")
    MANIFEST_FORMAT_ERROR = (9, "Texture manifest format error")

    @property
    def code(self) -> int:
        return self.value[0]

    @property
    def message(self) -> str:
        return self.value[1]


class CommandError(Exception):
    """Fatal error raised while parsing or validating a conversion command."""

    def __init__(self, kind: ErrorKind, context: Optional[str] = None) -> None:
        self.kind = kind
        self.context = context
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.context is None:
            return self.kind.message
        return f"{self.kind.message}: {self.context}"
