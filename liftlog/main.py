"""FastAPI application entry point."""
from fastapi import FastAPI

from liftlog.dependencies import ApiError, api_error_handler
from liftlog.routers import health, plates, workouts


app = FastAPI(title="LiftLog API")
app.add_exception_handler(ApiError, api_error_handler)


@app.get("/health", tags=["system"])
async def health_check() -> dict[str, str]:
    """Simple health probe for liveness checks."""
    return {"status": "ok"}


# Include routers
app.include_router(health.router)
app.include_router(workouts.router)
app.include_router(plates.router)
