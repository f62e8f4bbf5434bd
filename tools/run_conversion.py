from __future__ import annotations

import argparse

from fbxconv.pipeline import run


def parse_args() -> tuple[argparse.Namespace, list[str]]:
    parser = argparse.ArgumentParser(
        description="Resolve conversion settings and material textures for an asset",
        allow_abbrev=False,
        add_help=False,
    )
    parser.add_argument("--config", action="append", default=[])
    parser.add_argument("--report", required=False)
    return parser.parse_known_args()


def main() -> None:
    args, command = parse_args()
    code = run(command, config_paths=args.config, report_dir=args.report)
    if code:
        raise SystemExit(code)


if __name__ == "__main__":
    main()
