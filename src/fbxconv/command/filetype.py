from __future__ import annotations

from typing import Optional

from fbxconv.command.errors import CommandError, ErrorKind
from fbxconv.settings.settings import FileType

_TYPE_TOKENS = {
    "fbx": FileType.FBX,
    "g3db": FileType.G3DB,
    "g3dj": FileType.G3DJ,
}

_TYPE_EXTENSIONS = {
    FileType.FBX: ".fbx",
    FileType.G3DB: ".g3db",
    FileType.G3DJ: ".g3dj",
}


def parse_type(token: str, default: Optional[FileType] = None) -> FileType:
    """Map a filetype token to a FileType, case-insensitively.

    Without a default an unrecognized token raises UNKNOWN_FILETYPE.
    """
    file_type = _TYPE_TOKENS.get(token.lower())
    if file_type is not None:
        return file_type
    if default is None:
        raise CommandError(ErrorKind.UNKNOWN_FILETYPE, token)
    return default


def guess_type(path: str, default: FileType = FileType.AUTO) -> FileType:
    dot = path.rfind(".")
    if dot < 0:
        return default
    return parse_type(path[dot + 1 :], default)


def set_extension(path: str, ext: str, extra: str = "") -> str:
    dot = path.rfind(".")
    if dot < 0:
        return path + extra + ext
    return path[:dot] + extra + ext


def type_extension(file_type: FileType) -> str:
    return _TYPE_EXTENSIONS.get(file_type, "")
