"""
FastAPI application entry point.

Assembles the FastAPI app with the itinerary router.
"""

import logging
import sys

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from itinerary.graph.pipeline_api import router as itinerary_router


# ============================================================================
# Logging configuration
# ============================================================================
LOG_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)-35s | %(message)s"
)

logging.basicConfig(
    level=logging.INFO,
    format=LOG_FORMAT,
    datefmt="%Y-%m-%d %H:%M:%S",
    handlers=[logging.StreamHandler(sys.stdout)],
    force=True,
)

# Quiet noisy third-party loggers
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("openai").setLevel(logging.WARNING)


app = FastAPI(
    title="Itinerary Planner",
    description="Region clustering and day distribution for multi-day trips",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(itinerary_router)


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Itinerary Planner",
        "version": "0.1.0",
        "endpoints": {
            "distribute": "/api/itinerary/distribute",
            "mock": "/api/itinerary/mock",
        },
    }


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
