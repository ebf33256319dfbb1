"""
Page state for one request: which page is showing, plus the controllers
that page works with.
"""
from enum import Enum
from typing import Optional
from moads.forms import CreateCampaignForm
from moads.models import Campaign
from moads.repository import CampaignRepository
from moads.view_models import CampaignListViewModel, RecentActivityFeed


class Page(str, Enum):
    HOME = "home"
    CREATE = "create"
    CAMPAIGNS = "campaigns"
    INSIGHTS = "insights"


class AppState:
    """
    Owns the create form, the campaign list and the activity feed.

    `refresh_trigger` increases whenever a campaign is created; the list
    re-fetches whenever it is synced with a value it has not loaded yet.
    """

    def __init__(self, repository: CampaignRepository, recent_activity_limit: int = 5):
        self.repository = repository
        self.current_page = Page.HOME
        self.refresh_trigger = 0
        self.last_created: Optional[Campaign] = None
        self.create_form = CreateCampaignForm(repository, on_success=self.campaign_created)
        self.campaign_list = CampaignListViewModel(repository)
        self.activity = RecentActivityFeed(repository, limit=recent_activity_limit)

    def navigate(self, page: Page) -> None:
        self.current_page = Page(page)

    def campaign_created(self, campaign: Campaign) -> None:
        self.last_created = campaign
        self.refresh_trigger += 1
        self.navigate(Page.CAMPAIGNS)
