"""
Sub-assemblies of the holder.

Conventions: Z=0 is the print bed, the guide slot starts at Y=slot_offset_y
and the trays extend from Y=0 towards -Y. Every function builds fresh
solids from the config and raises GeometryError on the first failure.
"""
from __future__ import annotations

import logging

from ..utils.geo import (
    GeometryError,
    Polygon,
    Solid,
    box,
    cylinder,
    difference,
    extrude_polygon,
    move,
    rotate_x,
    size,
    transform,
    translate,
    union,
)
from .config import HolderConfig, JackTray

logger = logging.getLogger(__name__)


def _tray(cfg: HolderConfig, width: float, length: float) -> Solid:
    # open-topped shell around a width x length pocket, front wall left open
    wall = cfg.wall_thickness
    h = cfg.tray_height

    shell = box((width + 2 * wall, length + 2 * wall, h))
    shell = move(shell, z=size(shell)[2] / 2)

    pocket = box((width, length, h))
    pocket = move(pocket, y=wall, z=size(pocket)[2] / 2 + cfg.tray_bottom_height)

    return difference(shell, pocket)


def _jack(cfg: HolderConfig) -> JackTray:
    if cfg.jack is None:
        raise GeometryError(f"variant '{cfg.name}' has no jack tray")
    return cfg.jack


def board_tray(cfg: HolderConfig) -> Solid:
    """Tray for the main board, before it is shifted along X.

    Pin channels run along the left, right and back edges just above the
    floor, and a through-hole gives access to the reset button.
    """
    w, l, h = cfg.ec_width, cfg.ec_length, cfg.tray_height
    pc = cfg.pin_clearance
    wall = cfg.wall_thickness

    tray = move(_tray(cfg, w, l), y=-cfg.tray_outer_length / 2)

    pins = box((pc, l, h))
    pin_y = wall - size(pins)[1] / 2
    pin_z = cfg.pin_offset + size(pins)[2] / 2
    left = move(pins, x=-w / 2 + pc / 2, y=pin_y, z=pin_z)
    right = move(pins, x=w / 2 - pc / 2, y=pin_y, z=pin_z)

    back = box((w - pc / 2, pc, h))
    back = move(back, y=-l + 2 * wall, z=cfg.pin_offset + h / 2)

    push = cylinder(cfg.push_hole_depth, cfg.push_hole_radius)
    push = move(push, y=-cfg.push_hole_position * l)

    tray = difference(tray, left, right, back, push)
    logger.debug("board tray %s", size(tray))
    return tray


def jack_tray(cfg: HolderConfig) -> Solid:
    """Tray for the TRS jack, set back behind the slot by the jack gap."""
    jack = _jack(cfg)
    tray = _tray(cfg, jack.trs_width, jack.trs_length)
    return move(tray, y=-(jack.trs_length + jack.gap + 2 * cfg.wall_thickness))


def _ramp(cfg: HolderConfig, *points) -> Solid:
    outline = Polygon()
    for x, y in points:
        outline.add(x, y)
    return extrude_polygon(outline.close().vertices(), cfg.slot_height)


def slot_and_shield(cfg: HolderConfig) -> Solid:
    """Guide slot with insertion ramps on both ends, and the shield plate behind it."""
    sw, sl, sh = cfg.slot_width, cfg.slot_length, cfg.slot_height
    r = cfg.guide_ramp

    slot = box((sw, sl, sh))
    slot = move(slot, y=sl / 2 + cfg.slot_offset_y, z=sh / 2)

    left = _ramp(cfg, (0, 0), (0, r), (-r, 0))
    left = move(left, x=-sw / 2, y=-size(left)[1], z=size(left)[2] / 2)

    right = _ramp(cfg, (0, 0), (0, -r), (r, -r))
    right = move(right, x=sw / 2, z=size(right)[2] / 2)

    shield = box((cfg.shield_width, cfg.shield_length, cfg.shield_height))
    shield = move(shield,
                  y=cfg.shield_length / 2 + sl + cfg.slot_offset_y,
                  z=cfg.shield_height / 2)

    return union(slot, left, right, shield)


def usb_cutout(cfg: HolderConfig) -> Solid:
    """Stepped opening for the board's USB port, aligned with the board tray."""
    through = cfg.slot_length + cfg.shield_length

    relief = box((cfg.usb_relief_width,
                  through - cfg.usb_relief_inset,
                  cfg.usb_relief_height + cfg.tray_bottom_height),
                 rounding=cfg.usb_relief_rounding)
    relief = move(relief,
                  x=cfg.tray_translate_x,
                  y=cfg.usb_relief_inset + size(relief)[1] / 2)

    port = box((cfg.usb_port_width,
                through + 2 * cfg.usb_port_overhang,
                cfg.usb_port_height),
               rounding=cfg.usb_port_rounding)
    port = move(port,
                x=cfg.tray_translate_x,
                y=size(port)[1] / 2 - cfg.usb_port_overhang,
                z=cfg.tray_bottom_height + size(port)[2] / 2)

    return union(port, relief)


def board_cutout(cfg: HolderConfig) -> Solid:
    """Relief for the board's front edge where it enters the slot."""
    edge = box((cfg.ec_width, cfg.board_slot_length, cfg.board_slot_height))
    return move(edge,
                x=cfg.tray_translate_x,
                y=size(edge)[1] / 2 + cfg.slot_offset_y,
                z=cfg.tray_bottom_height + size(edge)[2] / 2)


def jack_bore(cfg: HolderConfig) -> Solid:
    """Plug bore for the TRS jack, lying along Y in front of the tray."""
    jack = _jack(cfg)
    radius = jack.jack_diameter / 2

    bore = cylinder(jack.jack_depth, radius)
    # center halfway between resting on the floor and the jack body center
    lift = radius - (radius - jack.trs_height / 2) / 2
    return transform(bore, translate((0, jack.jack_offset_y, lift)) @ rotate_x(90))


def jack_cutout(cfg: HolderConfig) -> Solid:
    """Plug bore and wall opening for the TRS jack, before placement on X."""
    jack = _jack(cfg)
    bore = jack_bore(cfg)

    opening = box((jack.trs_width, jack.cutout_length, jack.trs_height))
    opening = move(opening, y=-jack.cutout_length / 2, z=jack.trs_height / 2)

    return union(bore, opening)
