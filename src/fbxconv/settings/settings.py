from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet


class FileType(Enum):
    AUTO = 0
    FBX = 1
    G3DB = 2
    G3DJ = 3


MAX_INDEX_VALUE = (1 << 15) - 1
MAX_VERTEX_WEIGHTS = 8

# Texture-type tokens accepted after the last "_" of a manifest .tif reference.
LEGAL_POSTFIXES: FrozenSet[str] = frozenset(
    {
        "a",
        "n",
        "s",
        "r",
        "em",
        "h",
        "diffuse",
        "albedo",
        "normal",
        "specular",
        "emissive",
        "reflection",
        "height",
        "roughness",
        "metallic",
        "opacity",
    }
)

TexturePaths = Dict[str, Dict[str, str]]


@dataclass
class Settings:
    in_file: str = ""
    out_file: str = ""
    texture_load_dir: str = ""
    in_type: FileType = FileType.AUTO
    out_type: FileType = FileType.AUTO
    flip_v: bool = False
    pack_colors: bool = False
    verbose: bool = False
    help: bool = False
    max_node_part_bones_count: int = 12
    max_vertex_bones_count: int = 4
    max_vertex_count: int = MAX_INDEX_VALUE
    max_index_count: int = MAX_INDEX_VALUE
    texture_paths: TexturePaths = field(default_factory=dict)
