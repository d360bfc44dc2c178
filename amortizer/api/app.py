"""FastAPI application entry point."""

from fastapi import FastAPI

from amortizer.api.routes import schedule
from amortizer.config import settings

app = FastAPI(
    title="Amortizer",
    description="Loan amortization schedules",
    version="0.1.0",
    debug=settings.debug,
)

app.include_router(schedule.router)


@app.get("/health")
async def health():
    return {"status": "ok"}
