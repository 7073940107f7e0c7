import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from matchday import config
from matchday.database import init_db
from matchday.routes import matches, notifications, operations, teams, tournaments

logger = logging.getLogger(__name__)

app = FastAPI(title="Matchday API")

_cors_origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]
_cors_origins.extend(config.CORS_ORIGINS)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(teams.router, prefix="/api", tags=["teams"])
app.include_router(matches.router, prefix="/api", tags=["matches"])

# Operations room (joker / referee / availability ads)
app.include_router(operations.router, prefix="/api", tags=["operations"])

app.include_router(tournaments.router, prefix="/api", tags=["tournaments"])
app.include_router(notifications.router, prefix="/api", tags=["notifications"])


@app.on_event("startup")
def on_startup():
    init_db()
    route_count = sum(1 for r in app.routes if getattr(r, "path", "").startswith("/api"))
    logger.info(f"Matchday API started with {route_count} API routes")


@app.get("/api/health")
def health_check():
    return {"app_name": "Matchday API", "status": "healthy"}
