from __future__ import annotations

import logging
from typing import List

from ..utils.geo import Solid, difference, move, scale, size, union
from . import parts
from .config import HolderConfig

logger = logging.getLogger(__name__)


def _jack_x(cfg: HolderConfig) -> float:
    return -(cfg.jack.trs_width + cfg.jack.translate_x)


def _positive_parts(cfg: HolderConfig) -> List[Solid]:
    board = move(parts.board_tray(cfg), x=cfg.tray_translate_x)
    solids = [board]
    if cfg.jack is not None:
        jack = move(parts.jack_tray(cfg),
                    x=_jack_x(cfg),
                    y=cfg.jack.trs_length - 2 * cfg.wall_thickness)
        solids.append(jack)
    solids.append(parts.slot_and_shield(cfg))
    return solids


def _cutouts(cfg: HolderConfig) -> List[Solid]:
    cutters = [parts.usb_cutout(cfg), parts.board_cutout(cfg)]
    if cfg.jack is not None:
        cutters.append(move(parts.jack_cutout(cfg),
                            x=_jack_x(cfg),
                            z=cfg.tray_bottom_height))
    return cutters


def build(cfg: HolderConfig) -> Solid:
    """Assemble the holder described by `cfg`.

    All trays and the slot are unioned first; cutouts are subtracted only
    afterwards so no later union can fill them back in.
    """
    body = union(*_positive_parts(cfg))
    out = difference(body, *_cutouts(cfg))
    logger.debug("assembled %s holder, size %s", cfg.name, size(out))
    return out


def finalize(cfg: HolderConfig, solid: Solid) -> Solid:
    """Scale up to compensate for the material shrinking as it cools."""
    return scale(solid, cfg.shrink)
