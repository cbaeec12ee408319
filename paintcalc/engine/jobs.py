"""Edits on interior and exterior jobs.

Jobs are immutable; every function returns a new job and leaves its input
untouched. These are the operations a front end calls between recomputes.
"""

import uuid
from dataclasses import replace
from typing import Optional

from paintcalc.engine.money import Number, clamp_non_neg, to_decimal, whole_count
from paintcalc.engine.rates import RATES
from paintcalc.models.estimate import InteriorJobInput, RoomInput, create_room
from paintcalc.models.exterior import (
    ExteriorJobInput,
    FlakingSeverity,
    GarageDoorInput,
    Side,
    create_default_exterior_job,
)


# ---- Interior ----

def add_room(job: InteriorJobInput, name: Optional[str] = None) -> InteriorJobInput:
    """Append a default room, named "Room N" unless a name is given."""
    room = create_room(name or f"Room {len(job.rooms) + 1}")
    return replace(job, rooms=job.rooms + (room,))


def update_room(job: InteriorJobInput, room: RoomInput) -> InteriorJobInput:
    """Replace the room with the same id. Raises KeyError for an unknown id."""
    if not any(r.id == room.id for r in job.rooms):
        raise KeyError(room.id)
    return replace(job, rooms=tuple(room if r.id == room.id else r for r in job.rooms))


def duplicate_room(job: InteriorJobInput, room_id: str) -> InteriorJobInput:
    """Insert a copy right after the source room, with a new id and "(copy)" name."""
    for index, source in enumerate(job.rooms):
        if source.id == room_id:
            copy = replace(source, id=str(uuid.uuid4()), name=f"{source.name} (copy)")
            rooms = job.rooms[: index + 1] + (copy,) + job.rooms[index + 1:]
            return replace(job, rooms=rooms)
    return job


def remove_room(job: InteriorJobInput, room_id: str) -> InteriorJobInput:
    return replace(job, rooms=tuple(r for r in job.rooms if r.id != room_id))


def rename_room(job: InteriorJobInput, room_id: str, name: str) -> InteriorJobInput:
    return replace(
        job,
        rooms=tuple(replace(r, name=name) if r.id == room_id else r for r in job.rooms),
    )


def set_wall_colors(job: InteriorJobInput, count: Number) -> InteriorJobInput:
    return replace(job, num_wall_colors=whole_count(count))


def reset_interior_job() -> InteriorJobInput:
    return InteriorJobInput()


# ---- Exterior ----

def set_house_sqft(job: ExteriorJobInput, sqft: Number) -> ExteriorJobInput:
    return replace(job, house_sqft=clamp_non_neg(sqft))


def update_side_difficulty(
    job: ExteriorJobInput,
    side: Side,
    non_flat_ground: Optional[bool] = None,
    roof_access: Optional[bool] = None,
) -> ExteriorJobInput:
    """Change one side's flags; flags left as None keep their current value."""
    changes = {}
    if non_flat_ground is not None:
        changes["non_flat_ground"] = non_flat_ground
    if roof_access is not None:
        changes["roof_access"] = roof_access

    sides = tuple(
        replace(s, **changes) if s.side == side else s
        for s in job.side_difficulties
    )
    return replace(job, side_difficulties=sides)


def set_flaking_severity(job: ExteriorJobInput, severity: FlakingSeverity) -> ExteriorJobInput:
    """Switching to HEAVY keeps any existing adjustment (else the minimum); other levels clear it."""
    if severity == FlakingSeverity.HEAVY:
        adjustment = job.heavy_flaking_adjustment
        if adjustment is None:
            adjustment = RATES.exterior.flaking.heavy_min
    else:
        adjustment = None
    return replace(job, flaking_severity=severity, heavy_flaking_adjustment=adjustment)


def set_heavy_flaking_adjustment(job: ExteriorJobInput, adjustment: Number) -> ExteriorJobInput:
    flaking = RATES.exterior.flaking
    clamped = min(flaking.heavy_max, max(flaking.heavy_min, to_decimal(adjustment)))
    return replace(job, heavy_flaking_adjustment=clamped)


def set_shutter_count(job: ExteriorJobInput, count: Number) -> ExteriorJobInput:
    return replace(job, shutter_count=whole_count(count))


def set_garage_doors(
    job: ExteriorJobInput, one_car_doors: Number, two_car_doors: Number
) -> ExteriorJobInput:
    return replace(
        job,
        garage_doors=GarageDoorInput(
            one_car_doors=whole_count(one_car_doors),
            two_car_doors=whole_count(two_car_doors),
        ),
    )


def reset_exterior_job() -> ExteriorJobInput:
    return create_default_exterior_job()
