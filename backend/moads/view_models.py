"""
View models for the campaign list and the home page activity feed.
"""
import logging
from typing import Iterable, List, Optional, Union
from urllib.parse import urlencode
from moads.errors import DataAccessError
from moads.forms import EditCampaignForm
from moads.models import Campaign, StatusFilter, ViewMode
from moads.repository import CampaignRepository

logger = logging.getLogger(__name__)


def filter_campaigns(
    campaigns: Iterable[Campaign],
    status_filter: Union[StatusFilter, str] = StatusFilter.ALL,
) -> List[Campaign]:
    """Campaigns matching the status filter, in their original order."""
    status_filter = StatusFilter(status_filter)
    if status_filter == StatusFilter.ALL:
        return list(campaigns)
    return [c for c in campaigns if c.status.value == status_filter.value]


class CampaignListViewModel:
    """
    State behind the campaign management page.

    The campaign set is fetched on first sync and again whenever the refresh
    signal changes. Deletes and edits patch the local list in place instead
    of re-fetching.
    """

    load_failure_message = "Failed to load campaigns."
    delete_failure_message = "Failed to delete campaign. Please try again."

    def __init__(self, repository: CampaignRepository):
        self.repository = repository
        self.campaigns: List[Campaign] = []
        self.status_filter = StatusFilter.ALL
        self.view_mode = ViewMode.GRID
        self.loading = False
        self.load_error: Optional[str] = None
        self.pending_delete_id: Optional[str] = None
        self.delete_error: Optional[str] = None
        self.edit_form: Optional[EditCampaignForm] = None
        self._loaded_trigger: Optional[int] = None

    async def refresh(self) -> None:
        """Fetch the full campaign set. On failure the set is empty and load_error is set."""
        self.loading = True
        self.load_error = None
        try:
            self.campaigns = await self.repository.list()
        except DataAccessError as e:
            logger.error(f"Error fetching campaigns: {str(e)}")
            self.campaigns = []
            self.load_error = self.load_failure_message
        finally:
            self.loading = False

    async def sync(self, refresh_trigger: int) -> None:
        """Re-fetch if the refresh signal changed since the last fetch."""
        if self._loaded_trigger != refresh_trigger:
            await self.refresh()
            self._loaded_trigger = refresh_trigger

    @property
    def displayed(self) -> List[Campaign]:
        return filter_campaigns(self.campaigns, self.status_filter)

    def set_filter(self, value: Union[StatusFilter, str]) -> None:
        self.status_filter = StatusFilter(value)

    def set_view_mode(self, value: Union[ViewMode, str]) -> None:
        self.view_mode = ViewMode(value)

    @property
    def query_string(self) -> str:
        """Filter and display mode as URL query parameters."""
        return urlencode({"status": self.status_filter.value, "view": self.view_mode.value})

    def get(self, campaign_id: str) -> Campaign:
        for campaign in self.campaigns:
            if campaign.id == campaign_id:
                return campaign
        raise KeyError(campaign_id)

    # Delete flow

    def request_delete(self, campaign_id: str) -> Campaign:
        """Open the confirmation step for one campaign. Nothing is deleted yet."""
        campaign = self.get(campaign_id)
        self.pending_delete_id = campaign_id
        self.delete_error = None
        return campaign

    def cancel_delete(self) -> None:
        self.pending_delete_id = None

    @property
    def pending_delete(self) -> Optional[Campaign]:
        if self.pending_delete_id is None:
            return None
        try:
            return self.get(self.pending_delete_id)
        except KeyError:
            return None

    async def confirm_delete(self) -> bool:
        """
        Delete the campaign awaiting confirmation.

        Returns:
            True when the backend delete succeeded and the local entry was removed
        """
        campaign_id = self.pending_delete_id
        if campaign_id is None:
            return False

        self.pending_delete_id = None
        try:
            await self.repository.delete(campaign_id)
        except DataAccessError as e:
            logger.error(f"Error deleting campaign: {str(e)}")
            self.delete_error = self.delete_failure_message
            return False

        self.campaigns = [c for c in self.campaigns if c.id != campaign_id]
        return True

    # Edit flow

    def start_edit(self, campaign_id: str) -> EditCampaignForm:
        campaign = self.get(campaign_id)
        self.edit_form = EditCampaignForm(self.repository, campaign, on_saved=self._replace)
        return self.edit_form

    def cancel_edit(self) -> None:
        self.edit_form = None

    async def save_edit(self) -> bool:
        if self.edit_form is None:
            return False
        return await self.edit_form.submit()

    def _replace(self, updated: Campaign) -> None:
        self.campaigns = [updated if c.id == updated.id else c for c in self.campaigns]
        self.edit_form = None


class RecentActivityFeed:
    """Newest campaigns for the home page."""

    def __init__(self, repository: CampaignRepository, limit: int = 5):
        self.repository = repository
        self.limit = limit
        self.campaigns: List[Campaign] = []

    async def load(self) -> List[Campaign]:
        try:
            self.campaigns = await self.repository.recent(self.limit)
        except DataAccessError as e:
            logger.error(f"Error fetching recent campaigns: {str(e)}")
            self.campaigns = []
        return self.campaigns
