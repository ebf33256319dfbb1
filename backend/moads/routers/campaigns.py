from datetime import datetime, timezone
from typing import Any, Dict, List
from fastapi import APIRouter, Body, Depends, HTTPException, Query, status
from pydantic import ValidationError as PydanticValidationError
from moads.dependencies import get_repository
from moads.errors import DataAccessError, ValidationError
from moads.forms import clean_campaign_fields
from moads.models import Campaign, CampaignInput, CampaignPatch, StatusFilter
from moads.repository import CampaignRepository
from moads.view_models import filter_campaigns

router = APIRouter(prefix="/api/campaigns", tags=["campaigns"])


def _field_errors(error: PydanticValidationError) -> Dict[str, str]:
    """Flatten pydantic errors to field -> message; model-level errors go under end_date."""
    errors = {}
    for err in error.errors():
        field = ".".join(str(part) for part in err["loc"]) or "end_date"
        errors.setdefault(field, err["msg"])
    return errors


@router.get("", response_model=List[Campaign])
async def get_campaigns(
    status_filter: StatusFilter = Query(default=StatusFilter.ALL, alias="status"),
    repository: CampaignRepository = Depends(get_repository),
):
    """
    Get all campaigns, newest first.

    Args:
        status_filter: all, active, paused or completed (filtered client side)

    Returns:
        List of campaigns
    """
    try:
        campaigns = await repository.list()
    except DataAccessError as e:
        raise HTTPException(status_code=502, detail=f"Failed to fetch campaigns: {str(e)}")

    return filter_campaigns(campaigns, status_filter)


@router.get("/recent", response_model=List[Campaign])
async def get_recent_campaigns(
    limit: int = Query(default=5, ge=1, le=50, description="Number of campaigns to return"),
    repository: CampaignRepository = Depends(get_repository),
):
    """Get the most recently created campaigns."""
    try:
        return await repository.recent(limit)
    except DataAccessError as e:
        raise HTTPException(status_code=502, detail=f"Failed to fetch recent campaigns: {str(e)}")


@router.post("", response_model=Campaign, status_code=status.HTTP_201_CREATED)
async def create_campaign(
    payload: Dict[str, Any] = Body(...),
    repository: CampaignRepository = Depends(get_repository),
):
    """
    Create a campaign. New campaigns always start with status "active".

    Returns:
        The stored campaign, or 422 with every field error
    """
    try:
        draft = CampaignInput(**clean_campaign_fields(payload))
    except ValidationError as e:
        raise HTTPException(status_code=422, detail={"errors": e.errors})

    try:
        return await repository.create(draft)
    except DataAccessError as e:
        raise HTTPException(status_code=502, detail=f"Failed to create campaign: {str(e)}")


@router.patch("/{campaign_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_campaign(
    campaign_id: str,
    payload: Dict[str, Any] = Body(...),
    repository: CampaignRepository = Depends(get_repository),
):
    """
    Update some fields of a campaign. updated_at is always refreshed.

    The patch is checked against the stored campaign, so a lone start_date
    or end_date cannot invert the date range.
    """
    values = {k: v for k, v in payload.items() if k != "updated_at"}
    try:
        patch = CampaignPatch(**values, updated_at=datetime.now(timezone.utc))
    except PydanticValidationError as e:
        raise HTTPException(status_code=422, detail={"errors": _field_errors(e)})

    try:
        current = await repository.get(campaign_id)
    except DataAccessError as e:
        raise HTTPException(status_code=502, detail=f"Failed to update campaign: {str(e)}")

    if current is None:
        raise HTTPException(status_code=404, detail=f"Campaign {campaign_id} not found")

    merged = patch.applied_to(current)
    if merged.start_date > merged.end_date:
        raise HTTPException(
            status_code=422,
            detail={"errors": {"end_date": "End date must be after start date"}},
        )

    try:
        await repository.update(campaign_id, patch)
    except DataAccessError as e:
        raise HTTPException(status_code=502, detail=f"Failed to update campaign: {str(e)}")


@router.delete("/{campaign_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_campaign(
    campaign_id: str,
    repository: CampaignRepository = Depends(get_repository),
):
    """Delete a campaign."""
    try:
        await repository.delete(campaign_id)
    except DataAccessError as e:
        raise HTTPException(status_code=502, detail=f"Failed to delete campaign: {str(e)}")
