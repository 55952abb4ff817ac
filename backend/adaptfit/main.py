import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from adaptfit.config import LOG_LEVEL
from adaptfit.database import engine, Base
import adaptfit.models
from adaptfit.api import users, login, profile, baseline, targets, plan, progress, activities, dashboard, workouts

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

ALEMBIC_INI = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "alembic.ini")


# Run Alembic migrations on startup
def run_migrations():
    """Run pending Alembic migrations automatically on startup."""
    try:
        from alembic.config import Config
        from alembic import command
        alembic_cfg = Config(ALEMBIC_INI)
        command.upgrade(alembic_cfg, "head")
        logger.info("[Alembic] Migrations applied successfully")
    except Exception as e:
        logger.warning(f"[Alembic] Migration failed, falling back to create_all: {e}")

    # Ensure all tables exist (e.g. installed without the alembic/ directory)
    Base.metadata.create_all(bind=engine)

run_migrations()

app = FastAPI(title="AdaptFit API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


app.include_router(users.router)
app.include_router(login.router)
app.include_router(profile.router)
app.include_router(baseline.router)
app.include_router(targets.router)
app.include_router(plan.router)
app.include_router(progress.router)
app.include_router(activities.router)
app.include_router(dashboard.router)
app.include_router(workouts.router)

# Root endpoint
@app.get("/")
def root():
    return {
        "message": "Welcome to AdaptFit API",
        "docs": "/docs",
        "redoc": "/redoc"
    }

# Health check endpoint
@app.get("/health")
def health_check():
    return {"status": "healthy", "message": "API is running"}
