# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-07
# Description: main.py
# -----------------------------------------------------------------------------
from fastapi import FastAPI

from api.routers import categories, corrections, health, moderation

app = FastAPI(title="Finance Tracker Recommender API")
app.include_router(health.router)
app.include_router(categories.router)
app.include_router(corrections.router)
app.include_router(moderation.router)
