"""
Server-rendered pages: home, create campaign, manage campaigns, insights.

Handlers only translate HTTP into calls on the AppState controllers and
render the result; no campaign logic lives here. Every request gets its own
AppState, so the campaign list is fetched fresh on each visit and the filter
and display mode travel in the query string.
"""
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from moads.dependencies import get_app_state
from moads.models import StatusFilter, ViewMode
from moads.navigation import AppState, Page
from moads.templating import templates
from moads.view_models import CampaignListViewModel

router = APIRouter(tags=["pages"], include_in_schema=False)


def render(request: Request, name: str, ui: AppState, **context) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        name,
        {"ui": ui, "page": ui.current_page.value, **context},
    )


def redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url, status_code=303)


def list_url(request: Request) -> str:
    """The campaign list, keeping the filter and display mode of this request."""
    query = request.url.query
    return f"/campaigns?{query}" if query else "/campaigns"


async def campaign_list(
    status: Optional[StatusFilter] = Query(default=None),
    view: Optional[ViewMode] = Query(default=None),
    ui: AppState = Depends(get_app_state),
) -> CampaignListViewModel:
    """Load the campaign list for this request and apply the query parameters."""
    ui.navigate(Page.CAMPAIGNS)
    listing = ui.campaign_list
    await listing.sync(ui.refresh_trigger)
    if status is not None:
        listing.set_filter(status)
    if view is not None:
        listing.set_view_mode(view)
    return listing


def _render_list(request: Request, ui: AppState, listing: CampaignListViewModel) -> HTMLResponse:
    return render(request, "campaigns.html", ui, listing=listing)


def _not_found(campaign_id: str) -> HTTPException:
    return HTTPException(status_code=404, detail=f"Campaign {campaign_id} not found")


@router.get("/", response_class=HTMLResponse)
async def home(request: Request, ui: AppState = Depends(get_app_state)):
    """Hero section and recent activity."""
    ui.navigate(Page.HOME)
    recent_campaigns = await ui.activity.load()
    return render(request, "home.html", ui, recent_campaigns=recent_campaigns)


@router.get("/campaigns/new", response_class=HTMLResponse)
async def new_campaign(request: Request, ui: AppState = Depends(get_app_state)):
    ui.navigate(Page.CREATE)
    return render(request, "create.html", ui, form=ui.create_form)


@router.post("/campaigns/new", response_class=HTMLResponse)
async def create_campaign(request: Request, ui: AppState = Depends(get_app_state)):
    """
    Submit the create form.

    On success the browser is sent to the campaign list, which loads fresh
    and shows the new campaign first; otherwise the form is shown again with
    every error and the values as typed.
    """
    form = ui.create_form
    form.apply(await request.form())

    if await form.submit():
        return redirect("/campaigns")

    ui.navigate(Page.CREATE)
    return render(request, "create.html", ui, form=form)


@router.get("/campaigns", response_class=HTMLResponse)
async def campaigns(
    request: Request,
    listing: CampaignListViewModel = Depends(campaign_list),
    ui: AppState = Depends(get_app_state),
):
    """Campaign list with status filter and grid/table toggle."""
    return _render_list(request, ui, listing)


@router.get("/campaigns/{campaign_id}/delete", response_class=HTMLResponse)
async def confirm_delete_dialog(
    request: Request,
    campaign_id: str,
    listing: CampaignListViewModel = Depends(campaign_list),
    ui: AppState = Depends(get_app_state),
):
    """Show the delete confirmation. Nothing is deleted by this request."""
    try:
        listing.request_delete(campaign_id)
    except KeyError:
        raise _not_found(campaign_id)
    return _render_list(request, ui, listing)


@router.post("/campaigns/{campaign_id}/delete", response_class=HTMLResponse)
async def delete_campaign(
    request: Request,
    campaign_id: str,
    listing: CampaignListViewModel = Depends(campaign_list),
    ui: AppState = Depends(get_app_state),
):
    """
    Delete when the dialog was confirmed, otherwise just close it.

    A delete renders the list with the campaign removed locally; the list is
    not fetched again.
    """
    try:
        listing.request_delete(campaign_id)
    except KeyError:
        raise _not_found(campaign_id)

    form = await request.form()
    if form.get("confirm") != "yes":
        listing.cancel_delete()
        return redirect(list_url(request))

    await listing.confirm_delete()
    return _render_list(request, ui, listing)


@router.get("/campaigns/{campaign_id}/edit", response_class=HTMLResponse)
async def edit_campaign_modal(
    request: Request,
    campaign_id: str,
    listing: CampaignListViewModel = Depends(campaign_list),
    ui: AppState = Depends(get_app_state),
):
    """Open the edit modal with a snapshot of the campaign."""
    try:
        listing.start_edit(campaign_id)
    except KeyError:
        raise _not_found(campaign_id)
    return _render_list(request, ui, listing)


@router.post("/campaigns/{campaign_id}/edit", response_class=HTMLResponse)
async def save_campaign(
    request: Request,
    campaign_id: str,
    listing: CampaignListViewModel = Depends(campaign_list),
    ui: AppState = Depends(get_app_state),
):
    """Save the modal. On success the list entry is replaced in place."""
    try:
        form = listing.start_edit(campaign_id)
    except KeyError:
        raise _not_found(campaign_id)

    form.apply(await request.form())
    await listing.save_edit()
    return _render_list(request, ui, listing)


@router.post("/campaigns/{campaign_id}/edit/cancel")
async def cancel_edit(request: Request, campaign_id: str):
    return redirect(list_url(request))


@router.get("/insights", response_class=HTMLResponse)
async def insights(request: Request, ui: AppState = Depends(get_app_state)):
    """Analytics placeholder."""
    ui.navigate(Page.INSIGHTS)
    return render(request, "insights.html", ui)
