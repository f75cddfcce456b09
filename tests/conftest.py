"""Shared test fixtures for resource-authz tests."""

from __future__ import annotations

from dataclasses import dataclass

import pytest
from sqlalchemy import Integer, String, create_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column, sessionmaker

from resource_authz._models import Resource, Subject

# Make the plugin fixtures available without relying on the installed entry point.
from resource_authz.testing._fixtures import (  # noqa: F401
    authz_config,
    authz_engine,
    authz_registry,
    isolated_authz_state,
)

# ---------------------------------------------------------------------------
# Test models
# ---------------------------------------------------------------------------


class Base(DeclarativeBase):
    pass


class Terrain(Base):
    __tablename__ = "terrains"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(100))
    owner_id: Mapped[int] = mapped_column(Integer)
    status: Mapped[str] = mapped_column(String(20), default="active")


# ---------------------------------------------------------------------------
# Locked-down policy class: every action refused
# ---------------------------------------------------------------------------


class TerrainPolicy:
    def viewAny(self, user):  # noqa: N802
        """Determine whether the user can view any terrains."""
        return False

    def view(self, user, terrain):
        """Determine whether the user can view the terrain."""
        return False

    def create(self, user):
        """Determine whether the user can create terrains."""
        return False

    def update(self, user, terrain):
        """Determine whether the user can update the terrain."""
        return False

    def delete(self, user, terrain):
        """Determine whether the user can delete the terrain."""
        return False

    def restore(self, user, terrain):
        """Determine whether the user can restore the terrain."""
        return False

    def forceDelete(self, user, terrain):  # noqa: N802
        """Determine whether the user can permanently delete the terrain."""
        return False


# ---------------------------------------------------------------------------
# Plain actor satisfying SubjectLike
# ---------------------------------------------------------------------------


@dataclass
class MockActor:
    """Test actor that satisfies the SubjectLike protocol."""

    id: int | str
    role: str = "viewer"


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def owner() -> Subject:
    return Subject(id=7, attributes={"roles": ["editor"]})


@pytest.fixture()
def stranger() -> Subject:
    return Subject(id=8, attributes={"roles": ["viewer"]})


@pytest.fixture()
def terrain() -> Resource:
    return Resource(id=12, attributes={"owner_id": 7, "status": "active"})


@pytest.fixture()
def db_engine():
    """Create an in-memory SQLite engine with all tables."""
    eng = create_engine("sqlite:///:memory:", echo=False)
    Base.metadata.create_all(eng)
    return eng


@pytest.fixture()
def session(db_engine):
    """Provide a transactional session that rolls back after each test."""
    factory = sessionmaker(bind=db_engine)
    sess = factory()
    try:
        yield sess
    finally:
        sess.rollback()
        sess.close()


@pytest.fixture()
def sample_terrains(session: Session) -> list[Terrain]:
    """Seed the database with terrains."""
    terrains = [
        Terrain(id=1, name="North field", owner_id=7, status="active"),
        Terrain(id=2, name="South field", owner_id=8, status="archived"),
    ]
    session.add_all(terrains)
    session.flush()
    return terrains
