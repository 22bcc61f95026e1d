"""
SQLAlchemy models for the database.
Maps domain entities to database tables.
"""

import uuid

from sqlalchemy import Column, String, DateTime, Text, Boolean, ForeignKey, Index, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from timesheet.infrastructure.db.database import Base


class ProjectModel(Base):
    """Project table"""
    __tablename__ = 'projects'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    organization_id = Column(Uuid, nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text)
    active = Column(Boolean, default=True, nullable=False)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    activities = relationship("ActivityModel", back_populates="project")


class ActivityModel(Base):
    """Activity table"""
    __tablename__ = 'activities'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    organization_id = Column(Uuid, nullable=False)
    project_id = Column(Uuid, ForeignKey('projects.id'), nullable=False)
    username = Column(String(255), nullable=False)

    start_time = Column(DateTime(timezone=True), nullable=False)
    end_time = Column(DateTime(timezone=True), nullable=False)
    description = Column(Text)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    project = relationship("ProjectModel", back_populates="activities")

    __table_args__ = (
        Index('ix_activities_organization_start', 'organization_id', 'start_time'),
        Index('ix_activities_organization_username', 'organization_id', 'username'),
    )
