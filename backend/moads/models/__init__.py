from .campaign import Campaign, CampaignInput, CampaignPatch, CampaignStatus, StatusFilter, ViewMode

__all__ = [
    "Campaign",
    "CampaignInput",
    "CampaignPatch",
    "CampaignStatus",
    "StatusFilter",
    "ViewMode",
]
