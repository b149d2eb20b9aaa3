from sqlalchemy import Column, Integer, String, JSON, DateTime, Text
from sqlalchemy.orm import relationship

from talentflow.db.base import Base, utcnow


class Job(Base):
    """Job posting shown on the board, kept in a dense display order."""

    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False, index=True)
    slug = Column(String, unique=True, index=True, nullable=False)
    status = Column(String, default="active", index=True)  # "active" | "archived"
    tags = Column(JSON, default=list)
    order = Column(Integer, nullable=False, index=True)  # 0-based, gap-free
    description = Column(Text, nullable=True)

    created_at = Column(DateTime, default=utcnow, index=True)
    updated_at = Column(DateTime, nullable=True)

    # Relationships
    candidates = relationship("Candidate", back_populates="job")
    assessment = relationship("Assessment", back_populates="job", uselist=False)
