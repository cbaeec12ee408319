"""Published pricing rates for interior and exterior painting.

Built once at import and frozen: dataclass attributes cannot be reassigned
and the per-category tables are read-only mappings.
"""

from dataclasses import dataclass
from decimal import Decimal
from types import MappingProxyType
from typing import Mapping

from paintcalc.models.estimate import RoomType
from paintcalc.models.exterior import StoryType


@dataclass(frozen=True)
class DifficultyRates:
    non_flat_ground: Decimal  # per side
    roof_access: Decimal  # per side


@dataclass(frozen=True)
class FlakingRates:
    light: Decimal
    medium: Decimal
    heavy_min: Decimal
    heavy_max: Decimal


@dataclass(frozen=True)
class ExteriorAddOnRates:
    shutter: Decimal
    front_door: Decimal
    garage_1_car: Decimal
    garage_2_car: Decimal


@dataclass(frozen=True)
class ExteriorRates:
    base_fee: Decimal  # power wash, setup, materials
    height_multipliers: Mapping[StoryType, Decimal]
    difficulty: DifficultyRates
    flaking: FlakingRates
    coat_multiplier: Decimal  # two-coat application
    add_ons: ExteriorAddOnRates
    partial_job_multiplier: Decimal  # trim-only or siding-only


@dataclass(frozen=True)
class RateTable:
    # Walls: floor sqft x multiplier
    wall_multipliers: Mapping[RoomType, Decimal]
    vaulted_add: Decimal
    min_room_charge: Decimal

    # Trim
    trim_sf_mult: Decimal
    baseboard_lf_with_walls: Decimal
    baseboard_lf_only: Decimal
    stained_conversion_mult: Decimal

    # Ceilings: floor sqft x multiplier
    ceiling_mult_with_walls: Decimal
    ceiling_mult_only: Decimal

    # Per-unit items
    door_per_side: Decimal
    closet_standard: Decimal
    closet_walk_in: Decimal
    window_base: Decimal
    accent_wall_in_room: Decimal
    accent_wall_standalone: Decimal
    crown_molding_per_lf: Decimal
    scaffolding_fee: Decimal
    wallpaper_per_wall_sf: Decimal

    # Job level
    setup_threshold: Decimal
    setup_max_fee: Decimal
    additional_color_fee: Decimal
    customer_supplies_paint_deduct: Decimal  # fraction of running subtotal
    premium_paint_upcharge: Decimal

    # Advisory thresholds (warnings only)
    large_room_sqft_warning: Decimal
    door_sides_warning: int

    exterior: ExteriorRates


RATES = RateTable(
    wall_multipliers=MappingProxyType({
        RoomType.GENERAL: Decimal("2.8"),
        RoomType.KITCHEN: Decimal("3.1"),  # more cut-in, cabinets
        RoomType.BATHROOM: Decimal("4.1"),  # tight spaces, moisture prep
    }),
    vaulted_add=Decimal("0.5"),
    min_room_charge=Decimal("275"),
    trim_sf_mult=Decimal("0.5"),
    baseboard_lf_with_walls=Decimal("1.88"),
    baseboard_lf_only=Decimal("5.60"),
    stained_conversion_mult=Decimal("3.0"),
    ceiling_mult_with_walls=Decimal("0.6"),
    ceiling_mult_only=Decimal("1.7"),
    door_per_side=Decimal("63"),
    closet_standard=Decimal("120"),
    closet_walk_in=Decimal("185"),
    window_base=Decimal("70"),
    accent_wall_in_room=Decimal("150"),
    accent_wall_standalone=Decimal("185"),
    crown_molding_per_lf=Decimal("1.50"),
    scaffolding_fee=Decimal("650"),
    wallpaper_per_wall_sf=Decimal("7"),
    setup_threshold=Decimal("1566"),
    setup_max_fee=Decimal("300"),
    additional_color_fee=Decimal("134"),
    customer_supplies_paint_deduct=Decimal("0.15"),
    premium_paint_upcharge=Decimal("200"),
    large_room_sqft_warning=Decimal("5000"),
    door_sides_warning=20,
    exterior=ExteriorRates(
        base_fee=Decimal("1750"),
        height_multipliers=MappingProxyType({
            StoryType.ONE_STORY: Decimal("1.25"),
            StoryType.ONE_HALF_STORY: Decimal("1.5"),
            StoryType.TWO_STORY: Decimal("1.75"),
            StoryType.THREE_STORY: Decimal("2.25"),
        }),
        difficulty=DifficultyRates(
            non_flat_ground=Decimal("0.25"),
            roof_access=Decimal("0.25"),
        ),
        flaking=FlakingRates(
            light=Decimal("0"),
            medium=Decimal("0.3"),
            heavy_min=Decimal("0.5"),
            heavy_max=Decimal("1.0"),
        ),
        coat_multiplier=Decimal("1.6"),
        add_ons=ExteriorAddOnRates(
            shutter=Decimal("75"),
            front_door=Decimal("250"),
            garage_1_car=Decimal("200"),
            garage_2_car=Decimal("400"),
        ),
        partial_job_multiplier=Decimal("0.6"),
    ),
)
