"""
Form state controllers for the create form and the edit modal.

A form holds the draft values as typed, per-field error messages, a
submission-in-progress flag and one top-level submission error. Validation
runs over every field on each submit and the repository is only contacted
when the whole draft is valid.
"""
import logging
import math
from abc import ABC, abstractmethod
from datetime import date, datetime, timezone
from typing import Any, Callable, Dict, Mapping, Optional
from moads.errors import DataAccessError, ValidationError
from moads.formatting import format_currency
from moads.models import Campaign, CampaignInput, CampaignPatch, CampaignStatus
from moads.repository import CampaignRepository

logger = logging.getLogger(__name__)

CAMPAIGN_FIELDS = (
    "campaign_name",
    "google_ads_text",
    "meta_ads_caption",
    "budget",
    "start_date",
    "end_date",
    "audience",
)

REQUIRED_TEXT_FIELDS = {
    "campaign_name": "Campaign name is required",
    "google_ads_text": "Google Ads text is required",
    "meta_ads_caption": "Meta Ads caption is required",
    "audience": "Audience is required",
}

TEXT_FIELDS = tuple(REQUIRED_TEXT_FIELDS)


def parse_budget(value: Any) -> Optional[float]:
    """Parse a budget as typed. Returns None unless it is a finite number."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        amount = float(value)
    else:
        try:
            amount = float(str(value).strip())
        except ValueError:
            return None
    return amount if math.isfinite(amount) else None


def parse_date(value: Any) -> Optional[date]:
    """Parse an ISO (YYYY-MM-DD) date. Returns None when absent or malformed."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not value:
        return None
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError:
        return None


def _is_blank(value: Any) -> bool:
    return value is None or str(value).strip() == ""


def validate_campaign_fields(values: Mapping[str, Any]) -> Dict[str, str]:
    """
    Validate a campaign draft.

    Args:
        values: Field name to value as typed

    Returns:
        Field name to error message for every failing field (empty when valid)
    """
    errors: Dict[str, str] = {}

    for field, message in REQUIRED_TEXT_FIELDS.items():
        if _is_blank(values.get(field)):
            errors[field] = message

    budget = parse_budget(values.get("budget"))
    if budget is None or budget <= 0:
        errors["budget"] = "Valid budget is required"

    start_date = parse_date(values.get("start_date"))
    end_date = parse_date(values.get("end_date"))

    if _is_blank(values.get("start_date")):
        errors["start_date"] = "Start date is required"
    elif start_date is None:
        errors["start_date"] = "Start date must be a valid date"

    if _is_blank(values.get("end_date")):
        errors["end_date"] = "End date is required"
    elif end_date is None:
        errors["end_date"] = "End date must be a valid date"
    elif start_date is not None and start_date > end_date:
        errors["end_date"] = "End date must be after start date"

    return errors


def clean_campaign_fields(values: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Convert a draft to typed values.

    Raises:
        ValidationError: If any field is invalid
    """
    errors = validate_campaign_fields(values)
    if errors:
        raise ValidationError(errors)

    cleaned: Dict[str, Any] = {field: str(values[field]).strip() for field in TEXT_FIELDS}
    cleaned["budget"] = parse_budget(values["budget"])
    cleaned["start_date"] = parse_date(values["start_date"])
    cleaned["end_date"] = parse_date(values["end_date"])
    return cleaned


def _format_budget_input(budget: float) -> str:
    return str(int(budget)) if float(budget).is_integer() else str(budget)


class CampaignForm(ABC):
    """Shared draft/error/submission state for campaign forms."""

    fields = CAMPAIGN_FIELDS
    failure_message = "Failed to save campaign. Please try again."

    def __init__(self, repository: CampaignRepository, initial: Optional[Mapping[str, Any]] = None):
        self.repository = repository
        self.values: Dict[str, str] = {field: "" for field in self.fields}
        if initial:
            for field, value in initial.items():
                if field in self.values:
                    self.values[field] = "" if value is None else str(value)
        self.errors: Dict[str, str] = {}
        self.submit_error: Optional[str] = None
        self.is_submitting = False

    def change(self, field: str, value: Any) -> None:
        """Set one field. Clears that field's error and leaves the others."""
        if field not in self.values:
            raise KeyError(f"Unknown campaign field: {field}")
        self.values[field] = "" if value is None else str(value)
        self.errors.pop(field, None)

    def apply(self, data: Mapping[str, Any]) -> None:
        """Apply a batch of typed values, touching only fields that changed."""
        for field in self.fields:
            if field in data:
                value = "" if data[field] is None else str(data[field])
                if value != self.values[field]:
                    self.change(field, value)

    def validate(self) -> bool:
        self.errors = validate_campaign_fields(self.values)
        return not self.errors

    async def submit(self) -> bool:
        """
        Validate and save the draft.

        Returns:
            True when the repository call succeeded
        """
        if self.is_submitting:
            return False

        self.submit_error = None
        if not self.validate():
            return False

        self.is_submitting = True
        try:
            await self._save()
        except DataAccessError as e:
            logger.error(f"{self.failure_message} ({str(e)})")
            self.submit_error = self.failure_message
            return False
        finally:
            self.is_submitting = False

        self._succeeded()
        return True

    @abstractmethod
    async def _save(self) -> None:
        """Write the validated draft through the repository."""
        pass

    def _succeeded(self) -> None:
        pass


class CreateCampaignForm(CampaignForm):
    """Create flow. Resets the draft after a successful insert."""

    failure_message = "Failed to create campaign. Please try again."

    def __init__(
        self,
        repository: CampaignRepository,
        on_success: Optional[Callable[[Campaign], None]] = None,
    ):
        super().__init__(repository)
        self.on_success = on_success
        self.created: Optional[Campaign] = None

    async def _save(self) -> None:
        draft = CampaignInput(**clean_campaign_fields(self.values))
        self.created = await self.repository.create(draft)

    def _succeeded(self) -> None:
        self.reset()
        if self.on_success:
            self.on_success(self.created)

    def reset(self) -> None:
        self.values = {field: "" for field in self.fields}
        self.errors = {}
        self.submit_error = None

    # Live preview

    @property
    def preview_name(self) -> str:
        return self.values["campaign_name"] or "Campaign Name"

    @property
    def preview_google_text(self) -> str:
        return self.values["google_ads_text"] or "Your Google Ads text will appear here..."

    @property
    def preview_meta_caption(self) -> str:
        return self.values["meta_ads_caption"] or "Your Meta Ads caption will appear here..."

    @property
    def preview_budget(self) -> Optional[str]:
        """Formatted total budget, or None until a number has been typed."""
        budget = parse_budget(self.values["budget"])
        if budget is None:
            return None
        return format_currency(budget)


class EditCampaignForm(CampaignForm):
    """
    Edit modal. The draft is a snapshot of the campaign, so in-progress edits
    never leak into the list. Saving sends only the changed fields plus a
    fresh updated_at.
    """

    fields = CAMPAIGN_FIELDS + ("status",)
    failure_message = "Failed to update campaign. Please try again."

    def __init__(
        self,
        repository: CampaignRepository,
        campaign: Campaign,
        on_saved: Optional[Callable[[Campaign], None]] = None,
    ):
        super().__init__(repository, initial={
            "campaign_name": campaign.campaign_name,
            "google_ads_text": campaign.google_ads_text,
            "meta_ads_caption": campaign.meta_ads_caption,
            "budget": _format_budget_input(campaign.budget),
            "start_date": campaign.start_date.isoformat(),
            "end_date": campaign.end_date.isoformat(),
            "audience": campaign.audience,
            "status": campaign.status.value,
        })
        self.campaign = campaign
        self.on_saved = on_saved
        self.saved: Optional[Campaign] = None

    def validate(self) -> bool:
        errors = validate_campaign_fields(self.values)
        if self.values["status"] not in {status.value for status in CampaignStatus}:
            errors["status"] = "Status must be active, paused or completed"
        self.errors = errors
        return not errors

    def changed_fields(self) -> Dict[str, Any]:
        """Typed values that differ from the snapshot. Assumes the draft is valid."""
        cleaned = clean_campaign_fields(self.values)
        cleaned["status"] = CampaignStatus(self.values["status"])

        return {
            field: value
            for field, value in cleaned.items()
            if getattr(self.campaign, field) != value
        }

    async def _save(self) -> None:
        changes = self.changed_fields()
        updated_at = datetime.now(timezone.utc)
        patch = CampaignPatch(**changes, updated_at=updated_at)

        await self.repository.update(self.campaign.id, patch)

        self.saved = self.campaign.model_copy(update={**changes, "updated_at": updated_at})

    def _succeeded(self) -> None:
        if self.on_saved:
            self.on_saved(self.saved)
