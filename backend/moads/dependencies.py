from fastapi import Request
from moads.navigation import AppState
from moads.repository import CampaignRepository


def get_repository(request: Request) -> CampaignRepository:
    """Repository built at startup around the process-wide data client."""
    return request.app.state.repository


def get_app_state(request: Request) -> AppState:
    """
    Fresh page state for each request.

    Drafts, filters, dialogs and modals never outlive the request that
    produced them, so separate browsers and tabs cannot see each other's.
    """
    return AppState(
        request.app.state.repository,
        recent_activity_limit=request.app.state.settings.recent_activity_limit,
    )
