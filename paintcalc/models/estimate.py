"""Interior estimate data types."""

import uuid
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Optional


class RoomType(Enum):
    GENERAL = "general"  # bedrooms, living rooms, offices
    KITCHEN = "kitchen"
    BATHROOM = "bathroom"


class TrimMode(Enum):
    NONE = "none"
    TRIM_PACKAGE_SF = "trim_package_sf"  # priced off floor sqft
    BASEBOARDS_LF = "baseboards_lf"  # priced off linear feet


class WindowSize(Enum):
    STANDARD = 1
    LARGE = 2


class LineItemCategory(Enum):
    WALLS = "walls"
    CEILING = "ceiling"
    TRIM = "trim"
    DOORS = "doors"
    CLOSETS = "closets"
    WINDOWS = "windows"
    ACCENT_WALLS = "accent_walls"
    CROWN_MOLDING = "crown_molding"
    SCAFFOLDING = "scaffolding"
    ADDITIONAL_COLORS = "additional_colors"
    WALLPAPER_REMOVAL = "wallpaper_removal"
    PAINT_OPTIONS = "paint_options"
    SETUP_FEE = "setup_fee"


# ---- Inputs ----

@dataclass(frozen=True)
class WindowInput:
    size_factor: Decimal = Decimal("1")  # 1 = standard, 2 = large


@dataclass(frozen=True)
class RoomInput:
    id: str
    name: str
    floor_sqft: Decimal = Decimal("0")
    room_type: RoomType = RoomType.GENERAL

    # Paint scope
    paint_walls: bool = True
    paint_ceiling: bool = False
    vaulted: bool = False

    # Trim
    trim_mode: TrimMode = TrimMode.NONE
    baseboard_lf: Decimal = Decimal("0")
    stained_trim_conversion: bool = False
    crown_molding_lf: Decimal = Decimal("0")

    # Counted items
    door_sides: int = 0
    closets_standard: int = 0
    closets_walk_in: int = 0
    windows: tuple[WindowInput, ...] = ()
    accent_walls_in_room: int = 0
    accent_walls_standalone: int = 0

    # Special conditions
    needs_scaffolding: bool = False
    wallpaper_removal_sqft: Decimal = Decimal("0")


@dataclass(frozen=True)
class InteriorJobInput:
    rooms: tuple[RoomInput, ...] = ()
    num_wall_colors: int = 1  # first color is included
    customer_supplies_paint: bool = False
    premium_paint: bool = False

    # Display only, never priced
    job_name: str = ""
    estimator_name: str = ""


def create_room(name: str = "New Room", **overrides) -> RoomInput:
    """New room with default scope (walls only, general, 0 sqft) and a fresh id."""
    return RoomInput(id=str(uuid.uuid4()), name=name, **overrides)


# ---- Results ----

@dataclass(frozen=True)
class LineItem:
    category: LineItemCategory
    name: str
    basis: str
    cost: Decimal  # negative for deductions
    room_id: Optional[str] = None  # None for job-level items
    room_name: Optional[str] = None


@dataclass(frozen=True)
class CalculationResult:
    cost: Decimal
    basis: str


@dataclass(frozen=True)
class WallCalculationResult(CalculationResult):
    multiplier: Decimal = Decimal("0")
    minimum_applied: bool = False


@dataclass(frozen=True)
class CeilingCalculationResult(CalculationResult):
    multiplier: Decimal = Decimal("0")


@dataclass(frozen=True)
class AdditionalColorsResult(CalculationResult):
    extra_colors: int = 0


@dataclass(frozen=True)
class SetupFeeResult:
    fee: Decimal
    basis: str


@dataclass
class RoomResult:
    room_id: str
    room_name: str
    line_items: list[LineItem] = field(default_factory=list)
    room_total: Decimal = Decimal("0")


@dataclass
class EstimateResult:
    rooms: list[RoomResult] = field(default_factory=list)
    line_items: list[LineItem] = field(default_factory=list)  # room + job level
    subtotal: Decimal = Decimal("0")  # before setup fee
    setup_fee: Decimal = Decimal("0")
    total: Decimal = Decimal("0")
    room_count: int = 0
    warnings: list[str] = field(default_factory=list)
