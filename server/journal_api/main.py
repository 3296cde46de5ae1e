"""Journal API - FastAPI application entry point."""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from journal_core.config import get_settings

from .routes import entries, goals, journeys, stats

settings = get_settings()

app = FastAPI(
    title="Journal API",
    description="Entries, goals and journeys over the local journal store",
    version="1.0.0",
)

# Configure CORS for the mobile/web client
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "DELETE"],
    allow_headers=["*"],
)

app.include_router(entries.router)
app.include_router(goals.router)
app.include_router(journeys.router)
app.include_router(stats.router)


@app.get("/health")
async def health_check():
    """Health check endpoint for the API."""
    return {"status": "healthy", "service": "journal-api"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "server.journal_api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True,
    )
