"""Barbell and plate-loaded machine plate math."""

from __future__ import annotations

import math
from dataclasses import dataclass, field


@dataclass(frozen=True)
class PlateConfig:
    weight: float
    label: str


STANDARD_PLATES_LBS: tuple[PlateConfig, ...] = (
    PlateConfig(45, "45"),
    PlateConfig(35, "35"),
    PlateConfig(25, "25"),
    PlateConfig(10, "10"),
    PlateConfig(5, "5"),
    PlateConfig(2.5, "2.5"),
)


@dataclass
class PlateBreakdown:
    plates_per_side: list[tuple[PlateConfig, int]] = field(default_factory=list)
    weight_per_side: float = 0.0
    achievable_weight: float = 0.0
    is_exact: bool = True


def compute_plates(
    target_weight: float,
    available_plates: tuple[PlateConfig, ...] = STANDARD_PLATES_LBS,
) -> PlateBreakdown:
    """
    Compute the plates to load on each side for a total plate load.

    ``target_weight`` is the combined weight of all plates (bar excluded) and
    is split evenly between the two sides. Plates are picked greedily from
    the heaviest down, so ``available_plates`` must be sorted descending.

    Args:
        target_weight: Total plate load in lbs
        available_plates: Plate sizes to choose from

    Returns:
        PlateBreakdown with per-side counts and the load actually achievable

    Example:
        >>> breakdown = compute_plates(90)
        >>> breakdown.plates_per_side
        [(PlateConfig(weight=45, label='45'), 1)]
    """
    if not target_weight or math.isnan(target_weight) or target_weight <= 0:
        return PlateBreakdown()

    remaining = target_weight / 2
    plates: list[tuple[PlateConfig, int]] = []
    for plate in available_plates:
        count = math.floor(remaining / plate.weight)
        if count > 0:
            plates.append((plate, count))
            remaining -= count * plate.weight
            remaining = round(remaining, 2)  # float drift

    per_side = round(sum(plate.weight * count for plate, count in plates), 2)
    achievable = per_side * 2

    return PlateBreakdown(
        plates_per_side=plates,
        weight_per_side=per_side,
        achievable_weight=achievable,
        is_exact=abs(target_weight - achievable) < 0.01,
    )


def format_plate_text(breakdown: PlateBreakdown) -> str:
    """Render a breakdown as ``"45 + 25 + 10"``, one label per plate on a side."""
    if not breakdown.plates_per_side:
        return "No plates"
    return " + ".join(plate.label for plate, count in breakdown.plates_per_side for _ in range(count))
