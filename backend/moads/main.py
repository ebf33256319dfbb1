import logging
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from moads import __version__
from moads.config import Settings, get_settings
from moads.repository import CampaignRepository
from moads.routers import campaigns_router, pages_router
from moads.services import DataClient, create_data_client


def create_app(settings: Optional[Settings] = None, data_client: Optional[DataClient] = None) -> FastAPI:
    """
    Build the application.

    The data client is created once here and injected into the repository;
    pass `data_client` to substitute a test double.
    """
    settings = settings or get_settings()
    logging.getLogger("moads").setLevel(settings.log_level.upper())

    client = data_client or create_data_client(settings)
    repository = CampaignRepository(client)

    app = FastAPI(
        title="MoAds Campaign Manager",
        description="Create, preview and manage Google Ads and Meta Ads campaigns",
        version=__version__,
    )

    app.state.settings = settings
    app.state.data_client = client
    app.state.repository = repository

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(pages_router)
    app.include_router(campaigns_router)

    @app.get("/health")
    async def health():
        """Health check endpoint for monitoring."""
        return {
            "status": "healthy",
            "backend_configured": client.is_configured,
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run(
        "moads.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True
    )
