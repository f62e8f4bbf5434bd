from __future__ import annotations

from dataclasses import replace
import logging
from typing import AbstractSet, Callable, Dict, Optional, Sequence, Tuple

from fbxconv.command.errors import CommandError, ErrorKind
from fbxconv.command.filetype import guess_type, parse_type, set_extension
from fbxconv.manifest.parser import read_manifest
from fbxconv.settings.settings import LEGAL_POSTFIXES, MAX_INDEX_VALUE, MAX_VERTEX_WEIGHTS, FileType, Settings

logger = logging.getLogger(__name__)

OUTPUT_EXTENSION = ".fbx"
OUTPUT_SUFFIX = "_mh"

HELP_TEXT = """\
Usage: fbx-conv [options] <input> <texture dir> [<output>]

Options:
-?       : Display this help information.
-i <type>: Set the type of the input file to <type>
-o <type>: Set the type of the output file to <type>
-f       : Flip the V texture coordinates.
-p       : Pack vertex colors to one float.
-m <size>: The maximum amount of vertices or indices a mesh may contain (default: 32k)
-b <size>: The maximum amount of bones a nodepart can contain (default: 12)
-w <size>: The maximum amount of bone weights per vertex (default: 4)
-v       : Verbose: print additional progress information

<input>      : The filename of the file to convert.
<texture dir>: The directory resolved texture paths are prefixed with.
<output>     : The filename of the converted file.

<type>   : FBX, G3DJ (json) or G3DB (binary).
"""


def help_text() -> str:
    return HELP_TEXT


def format_command(args: Sequence[str]) -> str:
    return " ".join(args)


def _to_int(value: str) -> int:
    try:
        return int(value)
    except ValueError as exc:
        raise CommandError(ErrorKind.UNKNOWN_ARGUMENT, value) from exc


def _set_counts(settings: Settings, value: str) -> None:
    settings.max_vertex_count = settings.max_index_count = _to_int(value)


def _set_in_type(settings: Settings, value: str) -> None:
    settings.in_type = parse_type(value)


def _set_out_type(settings: Settings, value: str) -> None:
    settings.out_type = parse_type(value)


def _set_bones(settings: Settings, value: str) -> None:
    settings.max_node_part_bones_count = _to_int(value)


def _set_weights(settings: Settings, value: str) -> None:
    settings.max_vertex_bones_count = _to_int(value)


_VALUE_FLAGS: Dict[str, Callable[[Settings, str], None]] = {
    "i": _set_in_type,
    "o": _set_out_type,
    "b": _set_bones,
    "w": _set_weights,
    "m": _set_counts,
}

_SWITCH_FLAGS = {
    "?": "help",
    "f": "flip_v",
    "p": "pack_colors",
    "v": "verbose",
}


def _parse_flags(args: Sequence[str], settings: Settings) -> None:
    i = 0
    while i < len(args):
        arg = args[i]
        if len(arg) > 1 and arg[0] == "-":
            flag = arg[1]
            if flag in _SWITCH_FLAGS:
                setattr(settings, _SWITCH_FLAGS[flag], True)
            elif flag in _VALUE_FLAGS and i + 1 < len(args):
                i += 1
                _VALUE_FLAGS[flag](settings, args[i])
            else:
                raise CommandError(ErrorKind.UNKNOWN_OPTION, arg)
        elif not settings.in_file:
            settings.in_file = arg
        elif not settings.texture_load_dir:
            settings.texture_load_dir = arg
        elif not settings.out_file:
            settings.out_file = arg
        else:
            raise CommandError(ErrorKind.UNKNOWN_ARGUMENT, arg)
        i += 1


def validate(settings: Settings, legal_postfixes: AbstractSet[str] = LEGAL_POSTFIXES) -> None:
    """Check required inputs, resolve the texture manifest and infer output names.

    Raises CommandError on the first violated rule.
    """
    if not settings.in_file or not settings.texture_load_dir:
        raise CommandError(ErrorKind.MISSING_INPUT_FILE)

    settings.texture_paths = read_manifest(settings.in_file, settings.texture_load_dir, legal_postfixes)

    if settings.in_type is FileType.AUTO:
        settings.in_type = guess_type(settings.in_file, FileType.FBX)
    if not settings.out_file:
        settings.out_file = set_extension(settings.in_file, OUTPUT_EXTENSION, OUTPUT_SUFFIX)
    if settings.out_type is FileType.AUTO:
        settings.out_type = guess_type(settings.out_file)

    if settings.max_vertex_bones_count < 0 or settings.max_vertex_bones_count > MAX_VERTEX_WEIGHTS:
        raise CommandError(ErrorKind.INVALID_VERTEX_WEIGHT, str(settings.max_vertex_bones_count))
    if settings.max_node_part_bones_count < settings.max_vertex_bones_count:
        raise CommandError(ErrorKind.INVALID_BONE_COUNT, str(settings.max_node_part_bones_count))
    if settings.max_vertex_count < 0 or settings.max_vertex_count > MAX_INDEX_VALUE:
        raise CommandError(ErrorKind.INVALID_VERTEX_COUNT, str(settings.max_vertex_count))


def parse(
    args: Sequence[str],
    defaults: Optional[Settings] = None,
    legal_postfixes: AbstractSet[str] = LEGAL_POSTFIXES,
) -> Tuple[Settings, Optional[CommandError]]:
    """Build Settings from an argument vector (without the program name).

    Returns the settings and the first error encountered, if any. Settings
    carrying an error must not be handed to the conversion engine.
    """
    base = defaults if defaults is not None else Settings()
    settings = replace(base, texture_paths={})
    settings.help = settings.help or not args

    try:
        _parse_flags(args, settings)
        if settings.verbose:
            logger.debug("command: %s", format_command(args))
        if not settings.help:
            validate(settings, legal_postfixes)
    except CommandError as exc:
        logger.debug("command rejected: %s", exc)
        return settings, exc
    return settings, None
