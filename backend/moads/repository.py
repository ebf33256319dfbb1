"""
Campaign repository facade.

The only component allowed to call the data client on behalf of the UI.
"""
import logging
from typing import Any, Dict, List, Optional
from pydantic import ValidationError as PydanticValidationError
from moads.errors import DataAccessError
from moads.models import Campaign, CampaignInput, CampaignPatch
from moads.services.base import DataClient

logger = logging.getLogger(__name__)

CAMPAIGNS_TABLE = "campaigns"


class CampaignRepository:
    """CRUD operations on the campaigns table. No retries; failures raise DataAccessError."""

    def __init__(self, client: DataClient, table: str = CAMPAIGNS_TABLE):
        self.client = client
        self.table = table

    @staticmethod
    def _to_campaign(row: Dict[str, Any]) -> Campaign:
        try:
            return Campaign.model_validate(row)
        except PydanticValidationError as e:
            raise DataAccessError(f"Unexpected campaign row from backend: {str(e)}") from e

    async def list(self) -> List[Campaign]:
        """
        Get all campaigns, newest first.

        Returns:
            List of campaigns ordered by created_at descending
        """
        try:
            rows = await self.client.select(self.table, order_by="created_at", descending=True)
        except DataAccessError as e:
            logger.error(f"Error fetching campaigns: {str(e)}")
            raise

        return [self._to_campaign(row) for row in rows]

    async def recent(self, limit: int = 5) -> List[Campaign]:
        """Get the `limit` most recently created campaigns."""
        try:
            rows = await self.client.select(
                self.table, order_by="created_at", descending=True, limit=limit
            )
        except DataAccessError as e:
            logger.error(f"Error fetching recent campaigns: {str(e)}")
            raise

        return [self._to_campaign(row) for row in rows]

    async def get(self, campaign_id: str) -> Optional[Campaign]:
        """Get one campaign by id, or None when it does not exist."""
        try:
            rows = await self.client.select(self.table, column="id", value=campaign_id)
        except DataAccessError as e:
            logger.error(f"Error fetching campaign {campaign_id}: {str(e)}")
            raise

        return self._to_campaign(rows[0]) if rows else None

    async def create(self, draft: CampaignInput) -> Campaign:
        """
        Insert a new campaign.

        Args:
            draft: Validated campaign values

        Returns:
            The stored campaign with backend-assigned id and timestamps
        """
        payload = draft.to_insert_payload()
        try:
            rows = await self.client.insert(self.table, [payload])
        except DataAccessError as e:
            logger.error(f"Error creating campaign: {str(e)}")
            raise

        if not rows:
            raise DataAccessError("Backend did not return the created campaign")

        campaign = self._to_campaign(rows[0])
        logger.info(f"Created campaign {campaign.id}: {campaign.campaign_name}")
        return campaign

    async def update(self, campaign_id: str, patch: CampaignPatch) -> None:
        """
        Apply a partial update to one campaign.

        The caller sets patch.updated_at; only explicitly set fields are sent.
        """
        try:
            await self.client.update(self.table, patch.to_update_payload(), "id", campaign_id)
        except DataAccessError as e:
            logger.error(f"Error updating campaign {campaign_id}: {str(e)}")
            raise

        logger.info(f"Updated campaign {campaign_id}")

    async def delete(self, campaign_id: str) -> None:
        """Delete one campaign by id."""
        try:
            await self.client.delete(self.table, "id", campaign_id)
        except DataAccessError as e:
            logger.error(f"Error deleting campaign {campaign_id}: {str(e)}")
            raise

        logger.info(f"Deleted campaign {campaign_id}")
