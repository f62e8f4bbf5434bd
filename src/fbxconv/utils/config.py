from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, FrozenSet

import yaml

from fbxconv.settings.settings import LEGAL_POSTFIXES, FileType, Settings


def load_yaml(path: str | Path) -> Dict[str, Any]:
    """Load YAML config into a dict."""
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged: Dict[str, Any] = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


_SETTINGS_FIELDS = {f.name for f in fields(Settings)} - {"texture_paths", "help"}


@dataclass
class AppConfig:
    raw: Dict[str, Any]

    @classmethod
    def from_files(cls, *paths: str | Path) -> "AppConfig":
        merged: Dict[str, Any] = {}
        for path in paths:
            merged = deep_merge(merged, load_yaml(path))
        return cls(raw=merged)

    def default_settings(self) -> Settings:
        defaults_cfg = self.raw.get("defaults", {}) or {}
        unknown = set(defaults_cfg) - _SETTINGS_FIELDS
        if unknown:
            raise ValueError(f"Unknown settings in config defaults: {sorted(unknown)}")

        values: Dict[str, Any] = dict(defaults_cfg)
        for key in ("in_type", "out_type"):
            if key in values:
                values[key] = FileType[str(values[key]).upper()]
        if "max_vertex_count" in values and "max_index_count" not in values:
            values["max_index_count"] = values["max_vertex_count"]
        return Settings(**values)

    def legal_postfixes(self) -> FrozenSet[str]:
        tokens = (self.raw.get("manifest", {}) or {}).get("legal_postfixes")
        if tokens is None:
            return LEGAL_POSTFIXES
        return frozenset(str(t) for t in tokens)
