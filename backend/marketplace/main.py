from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from marketplace.core.config import settings
from marketplace.core.database import engine, Base, SessionLocal
from marketplace.services.role_registry import seed_default_roles
from marketplace.api.routes import roles, users
# Registers every model on Base.metadata (user.py imports the related models)
from marketplace.models import user  # noqa: F401


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Startup: create tables and seed the well-known roles.
    In production, use migrations (Alembic) instead of create_all.
    """
    Base.metadata.create_all(bind=engine)
    if settings.SEED_ROLES_ON_STARTUP:
        db = SessionLocal()
        try:
            seed_default_roles(db)
        finally:
            db.close()
    yield


app = FastAPI(
    title="Marketplace API",
    description="Marketplace accounts, roles and seller onboarding",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# All routes are prefixed with /api
app.include_router(users.router, prefix="/api")
app.include_router(roles.router, prefix="/api")


@app.get("/")
async def root():
    """Root endpoint - API information"""
    return {"message": "Marketplace API", "version": "1.0.0"}


@app.get("/health")
async def health():
    """Health check endpoint"""
    return {"status": "healthy"}
