"""
Unit tests for application state and display helpers.
"""
import pytest
from datetime import date, datetime
from moads.formatting import format_currency, format_date, pluralize_campaigns, status_badge_class
from moads.models import CampaignStatus
from moads.navigation import AppState, Page


@pytest.mark.unit
class TestAppState:
    """Test page navigation and the refresh signal."""

    def test_starts_on_home(self, repository):
        state = AppState(repository)

        assert state.current_page == Page.HOME
        assert state.refresh_trigger == 0

    def test_navigate(self, repository):
        state = AppState(repository)

        state.navigate("insights")

        assert state.current_page == Page.INSIGHTS

    async def test_create_signals_refresh_and_navigates(self, repository, data_client, valid_draft):
        state = AppState(repository)
        await state.campaign_list.sync(state.refresh_trigger)
        state.navigate(Page.CREATE)

        state.create_form.apply(valid_draft)
        assert await state.create_form.submit() is True

        assert state.current_page == Page.CAMPAIGNS
        assert state.refresh_trigger == 1
        assert state.last_created.campaign_name == "Fall Sale"

        await state.campaign_list.sync(state.refresh_trigger)
        assert state.campaign_list.campaigns[0].campaign_name == "Fall Sale"
        assert len(data_client.calls_for("select")) == 2

    async def test_failed_create_stays_on_form(self, repository, data_client, valid_draft):
        data_client.fail_on.add("insert")
        state = AppState(repository)
        state.navigate(Page.CREATE)

        state.create_form.apply(valid_draft)
        await state.create_form.submit()

        assert state.current_page == Page.CREATE
        assert state.refresh_trigger == 0

    def test_activity_limit(self, repository):
        state = AppState(repository, recent_activity_limit=3)

        assert state.activity.limit == 3


@pytest.mark.unit
class TestFormatting:
    """Test template helpers."""

    @pytest.mark.parametrize("value,expected", [
        (5000, "$5,000"),
        (1234.5, "$1,234.5"),
        (1234.05, "$1,234.05"),
        (1234.999, "$1,235"),
        (0.004, "$0"),
        ("250", "$250"),
        ("", ""),
        (None, ""),
    ])
    def test_format_currency(self, value, expected):
        assert format_currency(value) == expected

    def test_format_date(self):
        assert format_date(date(2025, 9, 1)) == "9/1/2025"
        assert format_date(datetime(2025, 12, 31, 23, 0)) == "12/31/2025"
        assert format_date("2025-09-30") == "9/30/2025"

    def test_status_badge_class(self):
        assert status_badge_class(CampaignStatus.ACTIVE) == "badge-active"
        assert status_badge_class("paused") == "badge-paused"
        assert status_badge_class("completed") == "badge-neutral"

    def test_pluralize(self):
        assert pluralize_campaigns(0) == "0 campaigns"
        assert pluralize_campaigns(1) == "1 campaign"
        assert pluralize_campaigns(2) == "2 campaigns"
