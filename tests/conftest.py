"""
Shared fixtures for the timesheet reporting tests.
"""

import os

# Must be set before the settings are first loaded
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("TIMEZONE", "Europe/Berlin")

import uuid
from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

from timesheet.domain.models.activity import Activity, Project
from timesheet.domain.models.principal import Principal, UserRole

BERLIN = ZoneInfo("Europe/Berlin")
ORGANIZATION_ID = uuid.UUID("8a7f6c3e-2b41-4d0e-9a55-0f1c2d3e4f50")
OTHER_ORGANIZATION_ID = uuid.UUID("1b2c3d4e-5f60-4a1b-8c2d-3e4f5a6b7c8d")


@pytest.fixture
def tz():
    return BERLIN


@pytest.fixture
def organization_id():
    return ORGANIZATION_ID


@pytest.fixture
def other_organization_id():
    return OTHER_ORGANIZATION_ID


@pytest.fixture
def project():
    return Project(organization_id=ORGANIZATION_ID, title="Website Relaunch")


@pytest.fixture
def alice():
    return Principal(organization_id=ORGANIZATION_ID, username="alice", roles=frozenset([UserRole.USER]))


@pytest.fixture
def admin():
    return Principal(organization_id=ORGANIZATION_ID, username="carol", roles=frozenset([UserRole.ADMIN]))


@pytest.fixture
def make_activity(project):
    """Factory for activities of the default project."""

    def _make(start: datetime, minutes: int = 60, username: str = "alice", **kwargs) -> Activity:
        return Activity(
            start=start,
            end=start + timedelta(minutes=minutes),
            project_id=kwargs.pop("project_id", project.id),
            organization_id=kwargs.pop("organization_id", ORGANIZATION_ID),
            username=username,
            **kwargs
        )

    return _make


@pytest.fixture
def db_session():
    """Session on a fresh in-memory database."""
    from timesheet.infrastructure.db.database import Base, SessionLocal, create_all_tables, engine

    create_all_tables()
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def persist(db_session):
    """Write projects and activities straight to the database through the mappers."""
    from timesheet.infrastructure.mappers.activity_mapper import ActivityMapper
    from timesheet.infrastructure.mappers.project_mapper import ProjectMapper

    mappers = {Project: ProjectMapper(), Activity: ActivityMapper()}

    def _persist(*entities):
        for entity in entities:
            db_session.add(mappers[type(entity)].domain_to_model(entity))
        db_session.commit()

    return _persist
