from __future__ import annotations

import logging
from typing import Optional, Sequence

from fbxconv.command.arguments import help_text, parse
from fbxconv.io.writer import ReportWriter
from fbxconv.utils.config import AppConfig

logger = logging.getLogger(__name__)


def _wants_verbose(args: Sequence[str]) -> bool:
    return any(len(arg) > 1 and arg[0] == "-" and arg[1] == "v" for arg in args)


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )


def run(args: Sequence[str], config_paths: Sequence[str] = (), report_dir: Optional[str] = None) -> int:
    """Parse a conversion command and resolve its textures.

    Returns the process exit status: 0 on success or help, otherwise the
    code of the first error.
    """
    configure_logging(_wants_verbose(args))
    cfg = AppConfig.from_files(*config_paths)

    settings, error = parse(args, cfg.default_settings(), cfg.legal_postfixes())
    if error is not None:
        logger.error("%s (code %d)", error, error.kind.code)
        return error.kind.code
    if settings.help:
        print(help_text())
        return 0

    textures = sum(len(group) for group in settings.texture_paths.values())
    logger.info(
        "%s -> %s (%s), %d material groups, %d textures",
        settings.in_file,
        settings.out_file,
        settings.out_type.name,
        len(settings.texture_paths),
        textures,
    )
    if report_dir:
        written = ReportWriter(report_dir).write_settings(settings)
        logger.info("wrote texture report to %s", written)
    return 0
