"""Shared fixtures: in-memory SQLite database, seeded roles, API client."""

import os
import sys
from pathlib import Path

# Point settings at SQLite before marketplace.core.database builds its engine
os.environ.setdefault("DATABASE_URL", "sqlite://")

backend_dir = Path(__file__).parent.parent
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine, event  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from marketplace.core.database import Base, get_db  # noqa: E402
from marketplace.main import app  # noqa: E402
from marketplace.models.role import Role  # noqa: E402
from marketplace.models.user import User  # noqa: E402
from marketplace.services.role_registry import DEFAULT_ROLES, seed_default_roles  # noqa: E402


def make_role(name: str) -> Role:
    """Build an unsaved Role with the default flags for a well-known name."""
    definition = next(d for d in DEFAULT_ROLES if d.name.value == name)
    return Role(
        name=definition.name.value,
        display_name=definition.display_name,
        can_sell=definition.can_sell,
        can_moderate=definition.can_moderate,
        can_access_admin=definition.can_access_admin,
    )


def make_engine(foreign_keys: bool = False):
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    if foreign_keys:
        # SQLite ignores REFERENCES clauses unless enabled per connection
        @event.listens_for(engine, "connect")
        def enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()
    return engine


@pytest.fixture
def db(request):
    # Tests marked @pytest.mark.foreign_keys get an FK-enforcing database
    engine = make_engine(foreign_keys=request.node.get_closest_marker("foreign_keys") is not None)
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def seeded_db(db):
    seed_default_roles(db)
    return db


@pytest.fixture
def create_user(seeded_db):
    """Factory that persists a user with the given role name."""
    counter = {"n": 0}

    def _create(role_name: str = "buyer", **fields) -> User:
        counter["n"] += 1
        role = seeded_db.query(Role).filter(Role.name == role_name).one()
        user = User(
            name=fields.pop("name", f"User {counter['n']}"),
            email=fields.pop("email", f"user{counter['n']}@example.com"),
            password="not-a-real-hash",
            role=role,
            **fields,
        )
        seeded_db.add(user)
        seeded_db.commit()
        seeded_db.refresh(user)
        return user

    return _create


@pytest.fixture
def client(seeded_db):
    def override_get_db():
        yield seeded_db

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
