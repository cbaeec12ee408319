"""Exterior painting price calculator.

Master formula:
    total_multiplier = height + difficulty + flaking
    base_calculation = round(total_multiplier x sqft + base fee)
    after_coats      = round(base_calculation x coat multiplier)
    full_total       = round(after_coats + add-ons)
    final_total      = round(full_total x scope multiplier)

Each checkpoint is rounded where it is computed, not at the end.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from typing import Iterable

from paintcalc.engine.money import (
    ZERO,
    Number,
    clamp_non_neg,
    fmt_number,
    round_currency,
    to_decimal,
    whole_count,
)
from paintcalc.engine.rates import RATES
from paintcalc.models.exterior import (
    ExteriorBreakdown,
    ExteriorEstimateResult,
    ExteriorJobInput,
    ExteriorLineItem,
    ExteriorLineItemCategory,
    ExteriorScope,
    FlakingSeverity,
    SideDifficulty,
    StoryType,
)

logger = logging.getLogger(__name__)

FULL_SCOPE = Decimal("1.0")

STORY_LABELS: dict[StoryType, str] = {
    StoryType.ONE_STORY: "1 Story",
    StoryType.ONE_HALF_STORY: "1.5 Story",
    StoryType.TWO_STORY: "2 Story",
    StoryType.THREE_STORY: "3 Story",
}

FLAKING_LABELS: dict[FlakingSeverity, str] = {
    FlakingSeverity.LIGHT: "Light",
    FlakingSeverity.MEDIUM: "Medium",
    FlakingSeverity.HEAVY: "Heavy",
}

SCOPE_LABELS: dict[ExteriorScope, str] = {
    ExteriorScope.FULL: "Full Exterior",
    ExteriorScope.TRIM_ONLY: "Trim Only",
    ExteriorScope.SIDING_ONLY: "Siding Only",
}


@dataclass(frozen=True)
class DifficultyAdjustment:
    adjustment: Decimal  # multiplier, not currency
    non_flat_count: int
    roof_access_count: int


@dataclass(frozen=True)
class AddOnCosts:
    shutters_cost: Decimal
    front_door_cost: Decimal
    garage_doors_cost: Decimal
    total: Decimal


def get_height_multiplier(story_type: StoryType) -> Decimal:
    """Height multiplier by story count. Unrecognised values price as one story."""
    table = RATES.exterior.height_multipliers
    return table.get(story_type, table[StoryType.ONE_STORY])


def calculate_difficulty_adjustment(
    side_difficulties: Iterable[SideDifficulty],
) -> DifficultyAdjustment:
    """Add a fixed step per side with non-flat ground and per side needing roof access."""
    non_flat_count = 0
    roof_access_count = 0
    for side in side_difficulties:
        if side.non_flat_ground:
            non_flat_count += 1
        if side.roof_access:
            roof_access_count += 1

    rates = RATES.exterior.difficulty
    return DifficultyAdjustment(
        adjustment=non_flat_count * rates.non_flat_ground + roof_access_count * rates.roof_access,
        non_flat_count=non_flat_count,
        roof_access_count=roof_access_count,
    )


def get_flaking_adjustment(
    severity: FlakingSeverity, heavy_adjustment: Number | None = None
) -> Decimal:
    """Light adds nothing, medium a fixed step, heavy the caller's value clamped to range."""
    rates = RATES.exterior.flaking
    if severity == FlakingSeverity.LIGHT:
        return rates.light
    if severity == FlakingSeverity.MEDIUM:
        return rates.medium
    if severity == FlakingSeverity.HEAVY:
        adj = rates.heavy_min if heavy_adjustment is None else to_decimal(heavy_adjustment)
        return min(rates.heavy_max, max(rates.heavy_min, adj))
    return rates.light


def calculate_add_ons(job: ExteriorJobInput) -> AddOnCosts:
    rates = RATES.exterior.add_ons
    shutters_cost = whole_count(job.shutter_count) * rates.shutter
    front_door_cost = rates.front_door if job.paint_front_door else ZERO
    garage_doors_cost = (
        whole_count(job.garage_doors.one_car_doors) * rates.garage_1_car
        + whole_count(job.garage_doors.two_car_doors) * rates.garage_2_car
    )
    return AddOnCosts(
        shutters_cost=shutters_cost,
        front_door_cost=front_door_cost,
        garage_doors_cost=garage_doors_cost,
        total=shutters_cost + front_door_cost + garage_doors_cost,
    )


def get_scope_multiplier(scope: ExteriorScope) -> Decimal:
    if scope in (ExteriorScope.TRIM_ONLY, ExteriorScope.SIDING_ONLY):
        return RATES.exterior.partial_job_multiplier
    return FULL_SCOPE


def calculate_exterior_estimate(job: ExteriorJobInput) -> ExteriorEstimateResult:
    """Price a house exterior with the master formula plus add-ons and scope scaling.

    Returns:
        ExteriorEstimateResult whose line items sum exactly to ``total``.
        ``calculated_at`` is the only field that depends on the clock.
    """
    sqft = clamp_non_neg(job.house_sqft)

    height_multiplier = get_height_multiplier(job.story_type)
    difficulty = calculate_difficulty_adjustment(job.side_difficulties)
    flaking_adjustment = get_flaking_adjustment(
        job.flaking_severity, job.heavy_flaking_adjustment
    )
    total_multiplier = height_multiplier + difficulty.adjustment + flaking_adjustment

    base_calculation = round_currency(total_multiplier * sqft + RATES.exterior.base_fee)
    after_coat_multiplier = round_currency(base_calculation * RATES.exterior.coat_multiplier)

    add_ons = calculate_add_ons(job)
    full_exterior_total = round_currency(after_coat_multiplier + add_ons.total)

    scope_multiplier = get_scope_multiplier(job.scope)
    final_total = round_currency(full_exterior_total * scope_multiplier)

    breakdown = ExteriorBreakdown(
        height_multiplier=height_multiplier,
        difficulty_adjustment=difficulty.adjustment,
        flaking_adjustment=flaking_adjustment,
        total_multiplier=total_multiplier,
        base_calculation=base_calculation,
        after_coat_multiplier=after_coat_multiplier,
        shutters_cost=add_ons.shutters_cost,
        front_door_cost=add_ons.front_door_cost,
        garage_doors_cost=add_ons.garage_doors_cost,
        total_add_ons=add_ons.total,
        full_exterior_total=full_exterior_total,
        scope_multiplier=scope_multiplier,
        final_total=final_total,
    )

    line_items = build_line_items(
        job, breakdown, difficulty.non_flat_count, difficulty.roof_access_count
    )
    logger.debug(
        "Exterior estimate %s: multiplier %s on %s sqft, total %s",
        job.id, total_multiplier, sqft, final_total,
    )

    return ExteriorEstimateResult(
        input=job,
        breakdown=breakdown,
        line_items=line_items,
        total=final_total,
        calculated_at=datetime.now(timezone.utc),
    )


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'s' if count > 1 else ''}"


def _sqft_label(sqft: Decimal) -> str:
    label = fmt_number(sqft)
    if "." in label:
        return label
    return f"{int(label):,}"


def build_line_items(
    job: ExteriorJobInput,
    breakdown: ExteriorBreakdown,
    non_flat_count: int,
    roof_access_count: int,
) -> list[ExteriorLineItem]:
    """Display lines derived from the breakdown checkpoints.

    Costs come from differences between adjacent checkpoints, never from an
    independent recomputation, so the lines always sum to ``final_total``.
    """
    sqft = clamp_non_neg(job.house_sqft)
    base_fee = RATES.exterior.base_fee

    height_cost = round_currency(breakdown.height_multiplier * sqft)
    difficulty_cost = round_currency(breakdown.difficulty_adjustment * sqft)
    flaking_cost = round_currency(breakdown.flaking_adjustment * sqft)

    # Per-component rounding can drift from base_calculation by a unit;
    # the last visible sqft line absorbs it.
    residue = breakdown.base_calculation - (base_fee + height_cost + difficulty_cost + flaking_cost)
    if breakdown.flaking_adjustment > 0:
        flaking_cost += residue
    elif breakdown.difficulty_adjustment > 0:
        difficulty_cost += residue
    else:
        height_cost += residue

    items = [
        ExteriorLineItem(
            category=ExteriorLineItemCategory.BASE,
            name="Base Fee",
            basis="Power wash, setup, materials",
            cost=base_fee,
        ),
        ExteriorLineItem(
            category=ExteriorLineItemCategory.HEIGHT,
            name=(
                f"{STORY_LABELS.get(job.story_type, '1 Story')} "
                f"({fmt_number(breakdown.height_multiplier)}x)"
            ),
            basis=f"{_sqft_label(sqft)} sq.ft",
            cost=height_cost,
        ),
    ]

    if breakdown.difficulty_adjustment > 0:
        details = []
        if non_flat_count > 0:
            details.append(f"{_plural(non_flat_count, 'side')} non-flat")
        if roof_access_count > 0:
            details.append(f"{_plural(roof_access_count, 'side')} roof access")
        items.append(
            ExteriorLineItem(
                category=ExteriorLineItemCategory.DIFFICULTY,
                name=f"Difficulty Adjustment (+{fmt_number(breakdown.difficulty_adjustment)})",
                basis=", ".join(details),
                cost=difficulty_cost,
            )
        )

    if breakdown.flaking_adjustment > 0:
        items.append(
            ExteriorLineItem(
                category=ExteriorLineItemCategory.FLAKING,
                name=(
                    f"{FLAKING_LABELS.get(job.flaking_severity, 'Light')} Flaking "
                    f"(+{fmt_number(breakdown.flaking_adjustment)})"
                ),
                basis="Prep work required",
                cost=flaking_cost,
            )
        )

    items.append(
        ExteriorLineItem(
            category=ExteriorLineItemCategory.COATS,
            name=f"Two-Coat Application (×{fmt_number(RATES.exterior.coat_multiplier)})",
            basis="Standard exterior coverage",
            cost=breakdown.after_coat_multiplier - breakdown.base_calculation,
        )
    )

    add_on_rates = RATES.exterior.add_ons
    if breakdown.shutters_cost > 0:
        items.append(
            ExteriorLineItem(
                category=ExteriorLineItemCategory.SHUTTERS,
                name="Shutters",
                basis=f"{whole_count(job.shutter_count)} × ${fmt_number(add_on_rates.shutter)}",
                cost=breakdown.shutters_cost,
            )
        )

    if breakdown.front_door_cost > 0:
        items.append(
            ExteriorLineItem(
                category=ExteriorLineItemCategory.FRONT_DOOR,
                name="Front Door",
                basis="3 coats, high gloss",
                cost=breakdown.front_door_cost,
            )
        )

    if breakdown.garage_doors_cost > 0:
        parts = []
        one_car = whole_count(job.garage_doors.one_car_doors)
        two_car = whole_count(job.garage_doors.two_car_doors)
        if one_car > 0:
            parts.append(f"{one_car} × 1-car")
        if two_car > 0:
            parts.append(f"{two_car} × 2-car")
        items.append(
            ExteriorLineItem(
                category=ExteriorLineItemCategory.GARAGE,
                name="Garage Doors",
                basis=", ".join(parts),
                cost=breakdown.garage_doors_cost,
            )
        )

    if breakdown.scope_multiplier < FULL_SCOPE:
        items.append(
            ExteriorLineItem(
                category=ExteriorLineItemCategory.SCOPE_ADJUSTMENT,
                name=(
                    f"{SCOPE_LABELS.get(job.scope, 'Full Exterior')} "
                    f"(×{fmt_number(breakdown.scope_multiplier)})"
                ),
                basis="Partial exterior pricing",
                cost=breakdown.final_total - breakdown.full_exterior_total,
            )
        )

    return items
