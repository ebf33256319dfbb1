from datetime import date as DateType, datetime
from enum import Enum
from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator


class CampaignStatus(str, Enum):
    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETED = "completed"


class StatusFilter(str, Enum):
    ALL = "all"
    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETED = "completed"


class ViewMode(str, Enum):
    GRID = "grid"
    TABLE = "table"


class Campaign(BaseModel):
    id: str = Field(..., description="Unique campaign identifier assigned by the backend")
    campaign_name: str = Field(..., description="Campaign name")
    google_ads_text: str = Field(..., description="Ad copy for Google Ads")
    meta_ads_caption: str = Field(..., description="Caption for Meta Ads")
    budget: float = Field(..., description="Total budget in USD")
    start_date: DateType = Field(..., description="First day of the campaign")
    end_date: DateType = Field(..., description="Last day of the campaign")
    audience: str = Field(..., description="Target audience description")
    status: CampaignStatus = Field(default=CampaignStatus.ACTIVE, description="Lifecycle status")
    created_at: datetime = Field(..., description="Creation timestamp set by the backend")
    updated_at: Optional[datetime] = Field(default=None, description="Last update timestamp")

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value: Any) -> Any:
        # Supabase tables may use integer or uuid primary keys
        if isinstance(value, int):
            return str(value)
        return value


class CampaignInput(BaseModel):
    """A validated draft ready for insertion. Status and timestamps are backend-owned."""

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    campaign_name: str = Field(..., min_length=1)
    google_ads_text: str = Field(..., min_length=1)
    meta_ads_caption: str = Field(..., min_length=1)
    budget: float = Field(..., gt=0, allow_inf_nan=False)
    start_date: DateType
    end_date: DateType
    audience: str = Field(..., min_length=1)

    @model_validator(mode="after")
    def check_date_range(self) -> "CampaignInput":
        if self.start_date > self.end_date:
            raise ValueError("end_date must be on or after start_date")
        return self

    def to_insert_payload(self) -> Dict[str, Any]:
        """Row for the campaigns table; new campaigns always start active."""
        payload = self.model_dump(mode="json")
        payload["status"] = CampaignStatus.ACTIVE.value
        return payload


class CampaignPatch(BaseModel):
    """Partial update. Only fields that were explicitly set are sent."""

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    campaign_name: Optional[str] = Field(default=None, min_length=1)
    google_ads_text: Optional[str] = Field(default=None, min_length=1)
    meta_ads_caption: Optional[str] = Field(default=None, min_length=1)
    budget: Optional[float] = Field(default=None, gt=0, allow_inf_nan=False)
    start_date: Optional[DateType] = None
    end_date: Optional[DateType] = None
    audience: Optional[str] = Field(default=None, min_length=1)
    status: Optional[CampaignStatus] = None
    updated_at: Optional[datetime] = None

    @field_validator("*", mode="before")
    @classmethod
    def reject_null(cls, value: Any, info: ValidationInfo) -> Any:
        # Omitted fields stay unchanged; explicit nulls are rejected
        if value is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return value

    @model_validator(mode="after")
    def check_date_range(self) -> "CampaignPatch":
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValueError("end_date must be on or after start_date")
        return self

    def changes(self) -> Dict[str, Any]:
        """Explicitly set fields as python values."""
        return self.model_dump(exclude_unset=True)

    def to_update_payload(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", exclude_unset=True)

    def applied_to(self, campaign: Campaign) -> Campaign:
        """The campaign as it would be stored after this patch."""
        return campaign.model_copy(update=self.changes())
