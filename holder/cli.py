"""Command-line entrypoints. They take no arguments and write holder.stl to the working directory."""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional, Union

from .logging_config import setup_logging
from .models import Variant, config_for
from .models.holder import build, finalize
from .utils.geo import GeometryError
from .utils.stl_writer import ExportError, render_stl

logger = logging.getLogger(__name__)


def run(variant: Union[Variant, str] = Variant.FULL,
        output: Optional[Union[str, Path]] = None,
        resolution: Optional[int] = None) -> Path:
    """Build `variant`, scale it for shrinkage and write the STL."""
    cfg = config_for(variant)
    logger.info("building %s holder", cfg.name)
    solid = finalize(cfg, build(cfg))
    if resolution is None:
        resolution = cfg.resolution
    return render_stl(solid, resolution, output or cfg.output)


def _main(variant: Variant) -> None:
    setup_logging()
    try:
        run(variant)
    except (GeometryError, ExportError) as e:
        logger.error("error: %s", e)
        sys.exit(1)
    logger.info("done")


def main() -> None:
    _main(Variant.FULL)


def main_compact() -> None:
    _main(Variant.COMPACT)


if __name__ == "__main__":
    main()
