"""Material manifest parsing.

The manifest is a plain text file next to the input asset (same name, ``.txt``
extension) produced by the modeling pipeline. It has no header and no markers;
the shape of each line decides what it means:

    101                      start material group "101"
    mat\\shader.mtd           rename the current group to "shader"
    tex\\shader_normal.tif    add the "normal" texture to the current group

Texture references resolve to ``<texture dir><sep><stem>.tga``.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
import logging
import re
from typing import AbstractSet, Iterable, Optional

from fbxconv.command.errors import CommandError, ErrorKind
from fbxconv.command.filetype import set_extension
from fbxconv.settings.settings import LEGAL_POSTFIXES, TexturePaths

logger = logging.getLogger(__name__)

MANIFEST_EXTENSION = ".txt"
MATERIAL_EXTENSION = "mtd"
TEXTURE_EXTENSION = "tif"
RESOLVED_TEXTURE_EXTENSION = ".tga"

_GROUP_LINE = re.compile(r"[0-9]+")


class LineKind(Enum):
    BLANK = "blank"
    GROUP = "group"
    RENAME = "rename"
    TEXTURE = "texture"
    INVALID = "invalid"


@dataclass(frozen=True)
class ManifestState:
    last_group_key: str = ""
    rename_target: Optional[str] = None

    @property
    def active_key(self) -> str:
        return self.rename_target if self.rename_target is not None else self.last_group_key


@dataclass(frozen=True)
class Reference:
    line: str
    sep: int
    dot: int

    @classmethod
    def split(cls, line: str) -> "Reference":
        return cls(line=line, sep=max(line.rfind("\\"), line.rfind("/")), dot=line.rfind("."))

    @property
    def extension(self) -> str:
        return self.line[self.dot + 1 :]

    @property
    def stem(self) -> str:
        end = self.dot if self.dot > self.sep else len(self.line)
        return self.line[self.sep + 1 : end]

    @property
    def type_token(self) -> str:
        stem = self.stem
        return stem[stem.rfind("_") + 1 :]

    def resolve(self, texture_dir: str) -> str:
        if self.sep < 0:
            return texture_dir + "/" + self.stem + RESOLVED_TEXTURE_EXTENSION
        return texture_dir + self.line[self.sep : self.dot] + RESOLVED_TEXTURE_EXTENSION


def classify_line(line: str) -> LineKind:
    line = line.strip()
    if not line:
        return LineKind.BLANK
    if _GROUP_LINE.fullmatch(line):
        return LineKind.GROUP
    ext = Reference.split(line).extension
    if ext == MATERIAL_EXTENSION:
        return LineKind.RENAME
    if ext == TEXTURE_EXTENSION:
        return LineKind.TEXTURE
    return LineKind.INVALID


def apply_line(
    state: ManifestState,
    line: str,
    groups: TexturePaths,
    texture_dir: str,
    legal_postfixes: AbstractSet[str] = LEGAL_POSTFIXES,
) -> ManifestState:
    """Apply one manifest line to ``groups`` and return the next parser state.

    Raises CommandError(MANIFEST_FORMAT_ERROR) for references that are neither
    ``.mtd`` nor ``.tif``.
    """
    line = line.strip()
    kind = classify_line(line)

    if kind is LineKind.BLANK:
        return state

    if kind is LineKind.GROUP:
        groups[line] = {}
        logger.debug("material group %s", line)
        return ManifestState(last_group_key=line, rename_target=None)

    if kind is LineKind.INVALID:
        raise CommandError(ErrorKind.MANIFEST_FORMAT_ERROR, line)

    ref = Reference.split(line)

    if kind is LineKind.RENAME:
        mtd_name = ref.stem
        old_key = state.last_group_key
        groups[mtd_name] = {}
        if old_key != mtd_name:
            groups.pop(old_key, None)
        logger.debug("group %s renamed to %s via %s", old_key, mtd_name, line)
        return replace(state, rename_target=mtd_name)

    token = ref.type_token
    if token not in legal_postfixes:
        logger.debug("skipping texture with unknown type %r: %s", token, line)
        return state

    group = groups.setdefault(state.active_key, {})
    if token in group:
        logger.debug("duplicate %s texture for group %s ignored: %s", token, state.active_key, line)
        return state

    group[token] = ref.resolve(texture_dir)
    logger.debug("group %s %s -> %s", state.active_key, token, group[token])
    return state


def parse_lines(
    lines: Iterable[str],
    texture_dir: str,
    legal_postfixes: AbstractSet[str] = LEGAL_POSTFIXES,
) -> TexturePaths:
    groups: TexturePaths = {}
    state = ManifestState()
    for line in lines:
        state = apply_line(state, line, groups, texture_dir, legal_postfixes)
    return groups


def manifest_path(in_file: str) -> str:
    return set_extension(in_file, MANIFEST_EXTENSION)


def read_manifest(
    in_file: str,
    texture_dir: str,
    legal_postfixes: AbstractSet[str] = LEGAL_POSTFIXES,
) -> TexturePaths:
    """Read the manifest belonging to ``in_file`` and resolve its texture paths."""
    path = manifest_path(in_file)
    try:
        with open(path, "r", encoding="utf-8") as f:
            lines = f.read().splitlines()
    except (OSError, UnicodeDecodeError) as exc:
        raise CommandError(ErrorKind.MANIFEST_UNREADABLE, path) from exc

    logger.info("textures dir: %s", texture_dir)
    groups = parse_lines(lines, texture_dir, legal_postfixes)
    logger.info("resolved %d material groups from %s", len(groups), path)
    return groups
