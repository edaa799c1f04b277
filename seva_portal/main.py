# seva_portal/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import (
    admins,
    auth,
    documents,
    donations,
    events,
    gallery,
    member_documents,
    members,
    posts,
    receipts,
    seed,
    site_settings,
    stats,
    team,
    volunteers,
)
from .core.config import settings
from .core.errors import register_exception_handlers
from .core.log import configure_logging
from .deps import get_repo
from .middleware.request_log import RequestLogMiddleware

configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # resolve through overrides so tests can swap the repository
    repo = app.dependency_overrides.get(get_repo, get_repo)()
    await repo.ensure_indexes()
    logger.info("%s started (%s)", settings.app_name, type(repo).__name__)
    yield
    repo.close()


app = FastAPI(lifespan=lifespan, title=settings.app_name)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLogMiddleware)
register_exception_handlers(app)

# ---------------- Include routers ----------------
app.include_router(auth.router)              # /api/auth
app.include_router(admins.router)            # /api/admins
app.include_router(donations.router)         # /api/donations
app.include_router(receipts.router)          # /api/generate-receipt, /api/test-receipt
app.include_router(events.router)            # /api/events
app.include_router(gallery.router)           # /api/gallery
app.include_router(posts.router)             # /api/posts
app.include_router(volunteers.router)        # /api/volunteers
app.include_router(members.router)           # /api/members
app.include_router(member_documents.router)  # /api/generate-id-card, /api/generate-appointment-letter
app.include_router(documents.router)         # /api/documents
app.include_router(team.router)              # /api/team
app.include_router(site_settings.router)     # /api/settings
app.include_router(stats.router)             # /api/stats
app.include_router(seed.router)              # /api/seed

# Health
@app.get("/health")
def health():
    return {"ok": True}
