"""Canonical fixtures shared by the engine and draft tests.

Interior: a 150 sqft bedroom (walls + ceiling) and a 200 sqft kitchen.
Exterior: a 2,000 sqft one-story house with no difficulty or flaking.
"""

from decimal import Decimal

import pytest

from paintcalc.models.estimate import InteriorJobInput, RoomType, create_room
from paintcalc.models.exterior import ExteriorJobInput, StoryType


@pytest.fixture
def bedroom():
    return create_room(
        "Bedroom",
        floor_sqft=Decimal("150"),
        room_type=RoomType.GENERAL,
        paint_walls=True,
        paint_ceiling=True,
    )


@pytest.fixture
def kitchen():
    return create_room(
        "Kitchen",
        floor_sqft=Decimal("200"),
        room_type=RoomType.KITCHEN,
        paint_walls=True,
        paint_ceiling=True,
    )


@pytest.fixture
def two_room_job(bedroom, kitchen) -> InteriorJobInput:
    """Bedroom 510 + kitchen 740 = 1250 subtotal."""
    return InteriorJobInput(rooms=(bedroom, kitchen))


@pytest.fixture
def one_story_house() -> ExteriorJobInput:
    """((1.25 x 2000) + 1750) x 1.6 = 6800."""
    return ExteriorJobInput(
        id="house-1",
        house_sqft=Decimal("2000"),
        story_type=StoryType.ONE_STORY,
    )
