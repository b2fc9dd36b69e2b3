"""Plate calculator endpoint."""
from fastapi import APIRouter, Query

from liftlog.models.schemas import PlateBreakdownResponse, PlateCount
from liftlog.services.plate_calculator import compute_plates, format_plate_text

router = APIRouter(prefix="/api/plates", tags=["plates"])


@router.get("", response_model=PlateBreakdownResponse)
async def get_plate_breakdown(weight: float = Query(..., ge=0, le=2000)):
    """Plates to load per side for a total plate load in lbs (bar excluded)."""
    breakdown = compute_plates(weight)
    return PlateBreakdownResponse(
        target_weight=weight,
        plates_per_side=[
            PlateCount(weight=plate.weight, label=plate.label, count=count)
            for plate, count in breakdown.plates_per_side
        ],
        weight_per_side=breakdown.weight_per_side,
        achievable_weight=breakdown.achievable_weight,
        is_exact=breakdown.is_exact,
        text=format_plate_text(breakdown),
    )
