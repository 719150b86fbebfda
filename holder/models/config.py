"""
Dimensional constants for the holder variants.

Every length is in millimetres. A `HolderConfig` fully determines the
geometry: the builders in `parts` and `holder` read nothing else, so a
variant is just another set of values.
"""
from __future__ import annotations

from enum import Enum
from typing import Dict, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    NonNegativeFloat,
    PositiveFloat,
    PositiveInt,
)

PLA_SHRINKAGE = 0.999  # ~0.1%
ABS_SHRINKAGE = 0.995  # ~0.5%


class Variant(str, Enum):
    FULL = "full"
    COMPACT = "compact"


class JackTray(BaseModel):
    """Secondary tray holding a TRS audio jack, and the cutout it needs."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    trs_width: PositiveFloat = 6.15
    trs_length: PositiveFloat = 14.3
    trs_height: PositiveFloat = 5.0

    translate_x: NonNegativeFloat = 3.9  # gap between the jack tray and the board tray on X
    gap: NonNegativeFloat = 3.8          # extra setback of the tray behind the slot on Y

    jack_diameter: PositiveFloat = 6.5
    jack_depth: PositiveFloat = 12.0
    jack_offset_y: float = 5.0           # plug bore center in front of the tray
    cutout_length: PositiveFloat = 3.0   # wall opening behind the bore


class HolderConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Variant.FULL.value

    # board footprint (Elite-C v4)
    ec_width: PositiveFloat = 18.65
    ec_length: PositiveFloat = 34.5

    pin_clearance: PositiveFloat = 2.8
    pin_offset: NonNegativeFloat = 0.15
    wall_thickness: PositiveFloat = 1.0

    slot_height: PositiveFloat = 12.0
    slot_width: PositiveFloat = 28.0
    slot_length: PositiveFloat = 3.9 + 2
    slot_offset_y: float = -2.0
    guide_ramp: PositiveFloat = 2.0      # leg length of the triangular insertion ramps

    shield_height: PositiveFloat = 15.0
    shield_width: PositiveFloat = 31.0
    shield_length: PositiveFloat = 1.6

    tray_height: PositiveFloat = 5.0
    tray_bottom_height: PositiveFloat = 2.5
    tray_translate_x: float = 3.70

    # reset button access, as a fraction of the board length behind the slot
    push_hole_radius: PositiveFloat = 2.5
    push_hole_depth: PositiveFloat = 10.0
    push_hole_position: float = Field(0.75, gt=0, lt=1)

    # stepped USB opening: a tall relief through slot and shield, plus the port itself
    usb_relief_width: PositiveFloat = 11.5
    usb_relief_height: PositiveFloat = 13.0
    usb_relief_rounding: NonNegativeFloat = 2.5
    usb_relief_inset: NonNegativeFloat = 0.5
    usb_port_width: PositiveFloat = 9.4
    usb_port_height: PositiveFloat = 3.5
    usb_port_rounding: NonNegativeFloat = 1.8
    usb_port_overhang: NonNegativeFloat = 3.0

    # relief for the board's front edge, starting where the guide slot starts
    board_slot_length: PositiveFloat = 1.5
    board_slot_height: PositiveFloat = 1.8

    jack: Optional[JackTray] = Field(default_factory=JackTray)

    shrinkage_ratio: PositiveFloat = PLA_SHRINKAGE
    resolution: PositiveInt = 300
    output: str = "holder.stl"

    @property
    def shrink(self) -> float:
        return 1.0 / self.shrinkage_ratio

    @property
    def tray_outer_width(self) -> float:
        return self.ec_width + 2 * self.wall_thickness

    @property
    def tray_outer_length(self) -> float:
        return self.ec_length + 2 * self.wall_thickness


FULL = HolderConfig()

# two-port board (nice!nano footprint), no jack tray, board centered on the slot
COMPACT = HolderConfig(
    name=Variant.COMPACT.value,
    ec_width=18.0,
    ec_length=33.3,
    slot_width=24.0,
    shield_width=27.0,
    tray_translate_x=0.0,
    jack=None,
)

VARIANTS: Dict[Variant, HolderConfig] = {
    Variant.FULL: FULL,
    Variant.COMPACT: COMPACT,
}


def config_for(variant: Variant | str) -> HolderConfig:
    return VARIANTS[Variant(variant)]
