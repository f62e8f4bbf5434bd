from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

import pandas as pd

from fbxconv.settings.settings import Settings, TexturePaths


def texture_table(texture_paths: TexturePaths) -> pd.DataFrame:
    rows = [
        {"group": group, "texture_type": texture_type, "path": path}
        for group, textures in texture_paths.items()
        for texture_type, path in textures.items()
    ]
    return pd.DataFrame(rows, columns=["group", "texture_type", "path"])


class ReportWriter:
    def __init__(self, output_root: str) -> None:
        self.output_root = Path(output_root)

    def write_settings(self, settings: Settings) -> Path:
        report_dir = self.output_root / Path(settings.in_file).stem
        report_dir.mkdir(parents=True, exist_ok=True)

        meta: Dict[str, Any] = {
            "in_file": settings.in_file,
            "out_file": settings.out_file,
            "texture_load_dir": settings.texture_load_dir,
            "in_type": settings.in_type.name,
            "out_type": settings.out_type.name,
            "flip_v": settings.flip_v,
            "pack_colors": settings.pack_colors,
            "max_node_part_bones_count": settings.max_node_part_bones_count,
            "max_vertex_bones_count": settings.max_vertex_bones_count,
            "max_vertex_count": settings.max_vertex_count,
            "max_index_count": settings.max_index_count,
        }
        with open(report_dir / "settings.json", "w", encoding="utf-8") as f:
            json.dump(meta, f, ensure_ascii=False, indent=2)
        with open(report_dir / "texture_paths.json", "w", encoding="utf-8") as f:
            json.dump(settings.texture_paths, f, ensure_ascii=False, indent=2)

        texture_table(settings.texture_paths).to_csv(report_dir / "textures.csv", index=False)
        return report_dir
