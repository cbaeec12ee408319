"""Interior painting price calculator.

Pure functions: room/job inputs in, itemised costs out. No I/O.
Every sub-calculation rounds its own cost to a whole currency unit, so
totals are exact sums of the displayed line items.
"""

import logging
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
from paintcalc.models.estimate import (
    AdditionalColorsResult,
    CalculationResult,
    CeilingCalculationResult,
    EstimateResult,
    InteriorJobInput,
    LineItem,
    LineItemCategory,
    RoomInput,
    RoomResult,
    RoomType,
    SetupFeeResult,
    TrimMode,
    WallCalculationResult,
    WindowInput,
    WindowSize,
)

logger = logging.getLogger(__name__)

LARGE_WINDOW_FACTOR = Decimal("2")


def get_wall_multiplier(room_type: RoomType) -> Decimal:
    """Per-sqft wall rate for a room category. Unrecognised types price as GENERAL."""
    return RATES.wall_multipliers.get(room_type, RATES.wall_multipliers[RoomType.GENERAL])


# ------------------------------------------------------------------
# Surfaces
# ------------------------------------------------------------------

def calculate_room_walls(
    floor_sqft: Number,
    room_type: RoomType,
    vaulted: bool = False,
    paint_walls: bool = True,
) -> WallCalculationResult:
    """Wall cost = floor sqft x (room multiplier [+ vaulted add]), floored at the room minimum.

    Args:
        floor_sqft: Floor area of the room.
        room_type: Category that selects the wall multiplier.
        vaulted: Adds the vaulted adjustment to the multiplier before the minimum.
        paint_walls: When False the walls are out of scope and cost nothing.

    Returns:
        WallCalculationResult with the multiplier used and whether the
        minimum room charge was applied.
    """
    sqft = to_decimal(floor_sqft)
    if not paint_walls or sqft <= 0:
        return WallCalculationResult(
            cost=ZERO,
            basis="No square footage" if paint_walls else "Walls not being painted",
            multiplier=ZERO,
            minimum_applied=False,
        )

    multiplier = get_wall_multiplier(room_type)
    if vaulted:
        multiplier += RATES.vaulted_add

    cost = sqft * multiplier
    minimum_applied = cost < RATES.min_room_charge
    cost = max(cost, RATES.min_room_charge)

    vaulted_note = f" + {fmt_number(RATES.vaulted_add)} vaulted" if vaulted else ""
    minimum_note = " (minimum applied)" if minimum_applied else ""
    return WallCalculationResult(
        cost=round_currency(cost),
        basis=f"{fmt_number(sqft)} sqft x {multiplier:.1f}{vaulted_note}{minimum_note}",
        multiplier=multiplier,
        minimum_applied=minimum_applied,
    )


def calculate_ceiling(
    floor_sqft: Number,
    paint_ceiling: bool = True,
    walls_being_painted: bool = True,
) -> CeilingCalculationResult:
    """Ceiling cost = floor sqft x rate; the ceiling-only rate applies when walls are skipped."""
    sqft = to_decimal(floor_sqft)
    if not paint_ceiling or sqft <= 0:
        return CeilingCalculationResult(
            cost=ZERO,
            basis="No square footage" if paint_ceiling else "Ceiling not being painted",
            multiplier=ZERO,
        )

    if walls_being_painted:
        multiplier = RATES.ceiling_mult_with_walls
        note = "(with walls)"
    else:
        multiplier = RATES.ceiling_mult_only
        note = "(ceiling only)"

    return CeilingCalculationResult(
        cost=round_currency(sqft * multiplier),
        basis=f"{fmt_number(sqft)} sqft x {fmt_number(multiplier)} {note}",
        multiplier=multiplier,
    )


def calculate_trim(
    floor_sqft: Number,
    trim_mode: TrimMode = TrimMode.NONE,
    baseboard_lf: Number = 0,
    walls_being_painted: bool = True,
    stained_conversion: bool = False,
) -> CalculationResult:
    """Trim package (floor sqft) or baseboards (linear feet), optionally x3 for stained wood."""
    if trim_mode == TrimMode.NONE:
        return CalculationResult(cost=ZERO, basis="No trim")

    if trim_mode == TrimMode.TRIM_PACKAGE_SF:
        sqft = clamp_non_neg(floor_sqft)
        cost = sqft * RATES.trim_sf_mult
        basis = f"{fmt_number(sqft)} sqft x ${fmt_number(RATES.trim_sf_mult)}"
    elif trim_mode == TrimMode.BASEBOARDS_LF:
        lf = clamp_non_neg(baseboard_lf)
        if walls_being_painted:
            rate = RATES.baseboard_lf_with_walls
            note = " (with walls)"
        else:
            rate = RATES.baseboard_lf_only
            note = " (baseboards only)"
        cost = lf * rate
        basis = f"{fmt_number(lf)} LF x ${fmt_number(rate)}{note}"
    else:
        raise ValueError(f"Unhandled trim mode: {trim_mode!r}")

    # Conversion applies to the mode cost, before rounding
    if stained_conversion and cost > 0:
        cost *= RATES.stained_conversion_mult
        basis += f" x {fmt_number(RATES.stained_conversion_mult)} (stained conversion)"

    return CalculationResult(cost=round_currency(cost), basis=basis)


def calculate_crown_molding(linear_feet: Number) -> CalculationResult:
    lf = clamp_non_neg(linear_feet)
    if lf <= 0:
        return CalculationResult(cost=ZERO, basis="No crown molding")

    return CalculationResult(
        cost=round_currency(lf * RATES.crown_molding_per_lf),
        basis=f"{fmt_number(lf)} LF x ${fmt_number(RATES.crown_molding_per_lf)}",
    )


def calculate_wallpaper_removal(wall_sqft: Number) -> CalculationResult:
    sqft = clamp_non_neg(wall_sqft)
    if sqft <= 0:
        return CalculationResult(cost=ZERO, basis="No wallpaper removal")

    return CalculationResult(
        cost=round_currency(sqft * RATES.wallpaper_per_wall_sf),
        basis=f"{fmt_number(sqft)} wall sqft x ${fmt_number(RATES.wallpaper_per_wall_sf)}",
    )


# ------------------------------------------------------------------
# Counted items
# ------------------------------------------------------------------

def calculate_doors(sides: Number) -> CalculationResult:
    count = whole_count(sides)
    if count <= 0:
        return CalculationResult(cost=ZERO, basis="No doors")

    return CalculationResult(
        cost=round_currency(count * RATES.door_per_side),
        basis=f"{count} side(s) x ${fmt_number(RATES.door_per_side)}",
    )


def _window_factor(window: WindowInput) -> Decimal:
    raw = window.size_factor
    if isinstance(raw, WindowSize):
        raw = raw.value
    # Missing, zero or negative factors price as a standard window
    return clamp_non_neg(raw) or Decimal("1")


def calculate_windows(windows: Iterable[WindowInput]) -> CalculationResult:
    """Each window costs base price x its size factor; factor >= 2 is listed as large."""
    total = ZERO
    standard_count = 0
    large_count = 0

    for window in windows or ():
        factor = _window_factor(window)
        total += RATES.window_base * factor
        if factor >= LARGE_WINDOW_FACTOR:
            large_count += 1
        else:
            standard_count += 1

    if standard_count == 0 and large_count == 0:
        return CalculationResult(cost=ZERO, basis="No windows")

    parts = []
    if standard_count > 0:
        parts.append(f"{standard_count} standard x ${fmt_number(RATES.window_base)}")
    if large_count > 0:
        parts.append(f"{large_count} large x ${fmt_number(RATES.window_base * LARGE_WINDOW_FACTOR)}")

    return CalculationResult(cost=round_currency(total), basis=" + ".join(parts))


def calculate_closets(standard: Number, walk_in: Number) -> CalculationResult:
    std_count = whole_count(standard)
    walk_in_count = whole_count(walk_in)
    if std_count <= 0 and walk_in_count <= 0:
        return CalculationResult(cost=ZERO, basis="No closets")

    cost = std_count * RATES.closet_standard + walk_in_count * RATES.closet_walk_in

    parts = []
    if std_count > 0:
        parts.append(f"{std_count} standard x ${fmt_number(RATES.closet_standard)}")
    if walk_in_count > 0:
        parts.append(f"{walk_in_count} walk-in x ${fmt_number(RATES.closet_walk_in)}")

    return CalculationResult(cost=round_currency(cost), basis=" + ".join(parts))


def calculate_accent_walls(in_room: Number, standalone: Number) -> CalculationResult:
    in_room_count = whole_count(in_room)
    standalone_count = whole_count(standalone)
    if in_room_count <= 0 and standalone_count <= 0:
        return CalculationResult(cost=ZERO, basis="No accent walls")

    cost = (
        in_room_count * RATES.accent_wall_in_room
        + standalone_count * RATES.accent_wall_standalone
    )

    parts = []
    if in_room_count > 0:
        parts.append(f"{in_room_count} in-room x ${fmt_number(RATES.accent_wall_in_room)}")
    if standalone_count > 0:
        parts.append(f"{standalone_count} standalone x ${fmt_number(RATES.accent_wall_standalone)}")

    return CalculationResult(cost=round_currency(cost), basis=" + ".join(parts))


def calculate_scaffolding(needs_scaffolding: bool) -> CalculationResult:
    if not needs_scaffolding:
        return CalculationResult(cost=ZERO, basis="No scaffolding needed")

    return CalculationResult(
        cost=RATES.scaffolding_fee,
        basis=f"Great room scaffolding: ${fmt_number(RATES.scaffolding_fee)}",
    )


# ------------------------------------------------------------------
# Job-level adjustments
# ------------------------------------------------------------------

def calculate_additional_colors(num_colors: Number) -> AdditionalColorsResult:
    """The first wall color is included; each extra color is a flat fee."""
    colors = whole_count(num_colors)
    extra = max(0, colors - 1)
    if extra <= 0:
        return AdditionalColorsResult(cost=ZERO, basis="Standard (1 color)", extra_colors=0)

    return AdditionalColorsResult(
        cost=round_currency(extra * RATES.additional_color_fee),
        basis=f"{extra} additional color(s) x ${fmt_number(RATES.additional_color_fee)}",
        extra_colors=extra,
    )


def calculate_setup_fee(subtotal: Number) -> SetupFeeResult:
    """Top small jobs up toward the threshold, capped at the max setup fee.

    No fee once the subtotal reaches the threshold; otherwise
    min(max fee, threshold - subtotal).
    """
    sub = clamp_non_neg(subtotal)
    threshold = RATES.setup_threshold

    if sub >= threshold:
        return SetupFeeResult(
            fee=ZERO,
            basis=f"Subtotal ${fmt_number(sub)} >= minimum ${fmt_number(threshold)}",
        )

    difference = threshold - sub
    fee = round_currency(min(RATES.setup_max_fee, difference))
    return SetupFeeResult(
        fee=fee,
        basis=(
            f"Job under ${fmt_number(threshold)}: "
            f"min(${fmt_number(RATES.setup_max_fee)}, ${fmt_number(round_currency(difference))})"
            f" = ${fmt_number(fee)}"
        ),
    )


def calculate_job_total(subtotal: Number) -> Decimal:
    """Subtotal plus whatever setup fee it triggers."""
    return to_decimal(subtotal) + calculate_setup_fee(subtotal).fee


# ------------------------------------------------------------------
# Room and job assembly
# ------------------------------------------------------------------

def _room_item(
    room: RoomInput, category: LineItemCategory, name: str, result: CalculationResult
) -> LineItem:
    return LineItem(
        category=category,
        name=name,
        basis=result.basis,
        cost=result.cost,
        room_id=room.id,
        room_name=room.name,
    )


def calculate_room(room: RoomInput) -> RoomResult:
    """Price one room. Only components with a positive cost become line items."""
    walls = calculate_room_walls(
        room.floor_sqft, room.room_type, vaulted=room.vaulted, paint_walls=room.paint_walls
    )
    ceiling = calculate_ceiling(
        room.floor_sqft,
        paint_ceiling=room.paint_ceiling,
        walls_being_painted=room.paint_walls,
    )
    trim = calculate_trim(
        room.floor_sqft,
        trim_mode=room.trim_mode,
        baseboard_lf=room.baseboard_lf,
        walls_being_painted=room.paint_walls,
        stained_conversion=room.stained_trim_conversion,
    )

    candidates = [
        (LineItemCategory.WALLS, f"Walls ({room.room_type.value})", walls),
        (
            LineItemCategory.CEILING,
            "Ceiling (with walls)" if room.paint_walls else "Ceiling only",
            ceiling,
        ),
        (
            LineItemCategory.TRIM,
            "Trim package" if room.trim_mode == TrimMode.TRIM_PACKAGE_SF else "Baseboards",
            trim,
        ),
        (LineItemCategory.CROWN_MOLDING, "Crown molding", calculate_crown_molding(room.crown_molding_lf)),
        (LineItemCategory.DOORS, "Doors", calculate_doors(room.door_sides)),
        (
            LineItemCategory.CLOSETS,
            "Closets",
            calculate_closets(room.closets_standard, room.closets_walk_in),
        ),
        (LineItemCategory.WINDOWS, "Windows", calculate_windows(room.windows)),
        (
            LineItemCategory.ACCENT_WALLS,
            "Accent walls",
            calculate_accent_walls(room.accent_walls_in_room, room.accent_walls_standalone),
        ),
        (LineItemCategory.SCAFFOLDING, "Scaffolding", calculate_scaffolding(room.needs_scaffolding)),
        (
            LineItemCategory.WALLPAPER_REMOVAL,
            "Wallpaper removal",
            calculate_wallpaper_removal(room.wallpaper_removal_sqft),
        ),
    ]

    line_items = [
        _room_item(room, category, name, result)
        for category, name, result in candidates
        if result.cost > 0
    ]

    return RoomResult(
        room_id=room.id,
        room_name=room.name,
        line_items=line_items,
        room_total=sum((item.cost for item in line_items), ZERO),
    )


def _room_warnings(room: RoomInput) -> list[str]:
    warnings = []
    sqft = to_decimal(room.floor_sqft)
    if sqft > RATES.large_room_sqft_warning:
        warnings.append(
            f"{room.name}: Unusually large room ({fmt_number(sqft)} sqft). Please verify."
        )
    door_sides = to_decimal(room.door_sides)
    if door_sides > RATES.door_sides_warning:
        warnings.append(
            f"{room.name}: High door count ({fmt_number(door_sides)} sides). Please verify."
        )
    return warnings


def calculate_interior_estimate(job: InteriorJobInput) -> EstimateResult:
    """Price a full interior job.

    Job-level adjustments are applied in a fixed order against a running
    subtotal: additional colors, customer-supplied paint deduction (a
    percentage of the subtotal at that point), premium paint, and finally
    the setup fee computed against the adjusted subtotal.

    Warnings flag suspicious input but never change any number.
    """
    room_results: list[RoomResult] = []
    line_items: list[LineItem] = []

    for room in job.rooms:
        result = calculate_room(room)
        room_results.append(result)
        line_items.extend(result.line_items)

    subtotal = sum((item.cost for item in line_items), ZERO)

    colors = calculate_additional_colors(job.num_wall_colors)
    if colors.cost > 0:
        line_items.append(
            LineItem(
                category=LineItemCategory.ADDITIONAL_COLORS,
                name="Additional wall colors",
                basis=colors.basis,
                cost=colors.cost,
            )
        )
        subtotal += colors.cost

    if job.customer_supplies_paint:
        # Percentage of the running subtotal, taken before the line is added
        deduction = round_currency(subtotal * RATES.customer_supplies_paint_deduct)
        line_items.append(
            LineItem(
                category=LineItemCategory.PAINT_OPTIONS,
                name="Customer supplied paint",
                basis=f"{fmt_number(RATES.customer_supplies_paint_deduct * 100)}% material deduction",
                cost=-deduction,
            )
        )
        subtotal -= deduction

    if job.premium_paint:
        line_items.append(
            LineItem(
                category=LineItemCategory.PAINT_OPTIONS,
                name="Premium paint upgrade",
                basis="Higher-grade materials",
                cost=RATES.premium_paint_upcharge,
            )
        )
        subtotal += RATES.premium_paint_upcharge

    setup = calculate_setup_fee(subtotal)
    if setup.fee > 0:
        line_items.append(
            LineItem(
                category=LineItemCategory.SETUP_FEE,
                name="Setup/cleanup fee",
                basis=setup.basis,
                cost=setup.fee,
            )
        )

    warnings: list[str] = []
    if not job.rooms:
        warnings.append("No rooms added to estimate")
    for room in job.rooms:
        warnings.extend(_room_warnings(room))

    total = subtotal + setup.fee
    logger.debug(
        "Interior estimate: %d rooms, subtotal %s, setup fee %s, total %s",
        len(job.rooms), subtotal, setup.fee, total,
    )

    return EstimateResult(
        rooms=room_results,
        line_items=line_items,
        subtotal=subtotal,
        setup_fee=setup.fee,
        total=total,
        room_count=len(job.rooms),
        warnings=warnings,
    )
