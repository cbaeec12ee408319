"""Exterior estimate data types."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional


class StoryType(Enum):
    ONE_STORY = "one_story"
    ONE_HALF_STORY = "one_half_story"
    TWO_STORY = "two_story"
    THREE_STORY = "three_story"


class Side(Enum):
    FRONT = "front"
    BACK = "back"
    LEFT = "left"
    RIGHT = "right"


class FlakingSeverity(Enum):
    LIGHT = "light"
    MEDIUM = "medium"
    HEAVY = "heavy"


class ExteriorScope(Enum):
    FULL = "full"  # siding + trim
    TRIM_ONLY = "trim_only"
    SIDING_ONLY = "siding_only"


class ExteriorLineItemCategory(Enum):
    BASE = "base"
    HEIGHT = "height"
    DIFFICULTY = "difficulty"
    FLAKING = "flaking"
    COATS = "coats"
    SHUTTERS = "shutters"
    FRONT_DOOR = "front_door"
    GARAGE = "garage"
    SCOPE_ADJUSTMENT = "scope"


@dataclass(frozen=True)
class SideDifficulty:
    side: Side
    non_flat_ground: bool = False  # landscaping, slope
    roof_access: bool = False


@dataclass(frozen=True)
class GarageDoorInput:
    one_car_doors: int = 0
    two_car_doors: int = 0


def create_default_side_difficulties() -> tuple[SideDifficulty, ...]:
    return tuple(SideDifficulty(side=side) for side in Side)


@dataclass(frozen=True)
class ExteriorJobInput:
    id: str
    house_sqft: Decimal = Decimal("0")
    story_type: StoryType = StoryType.ONE_STORY
    side_difficulties: tuple[SideDifficulty, ...] = field(
        default_factory=create_default_side_difficulties
    )
    flaking_severity: FlakingSeverity = FlakingSeverity.LIGHT
    # Only read when flaking_severity is HEAVY; clamped to 0.5-1.0
    heavy_flaking_adjustment: Optional[Decimal] = None
    scope: ExteriorScope = ExteriorScope.FULL
    shutter_count: int = 0
    paint_front_door: bool = False  # 3 coats, high gloss
    garage_doors: GarageDoorInput = field(default_factory=GarageDoorInput)
    notes: str = ""


def create_default_exterior_job() -> ExteriorJobInput:
    return ExteriorJobInput(id=str(uuid.uuid4()))


@dataclass(frozen=True)
class ExteriorBreakdown:
    height_multiplier: Decimal
    difficulty_adjustment: Decimal
    flaking_adjustment: Decimal
    total_multiplier: Decimal  # applied to house sqft

    base_calculation: Decimal  # multiplier x sqft + base fee
    after_coat_multiplier: Decimal

    shutters_cost: Decimal
    front_door_cost: Decimal
    garage_doors_cost: Decimal
    total_add_ons: Decimal

    full_exterior_total: Decimal  # before scope adjustment
    scope_multiplier: Decimal
    final_total: Decimal


@dataclass(frozen=True)
class ExteriorLineItem:
    category: ExteriorLineItemCategory
    name: str
    basis: str
    cost: Decimal


@dataclass
class ExteriorEstimateResult:
    input: ExteriorJobInput
    breakdown: ExteriorBreakdown
    line_items: list[ExteriorLineItem] = field(default_factory=list)
    total: Decimal = Decimal("0")
    calculated_at: Optional[datetime] = None  # wall clock, not part of the price
