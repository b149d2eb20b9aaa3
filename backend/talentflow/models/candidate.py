from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Text
from sqlalchemy.orm import relationship

from talentflow.db.base import Base, utcnow


STAGES = ["applied", "screen", "tech", "offer", "hired", "rejected"]


class Candidate(Base):
    """Applicant for a single job, moving through the hiring pipeline."""

    __tablename__ = "candidates"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)
    email = Column(String, nullable=False, index=True)
    stage = Column(String, default="applied", index=True)  # one of STAGES
    job_id = Column(Integer, ForeignKey("jobs.id"), index=True)

    phone = Column(String, nullable=True)
    experience = Column(Integer, nullable=True)  # years

    created_at = Column(DateTime, default=utcnow, index=True)
    updated_at = Column(DateTime, default=utcnow, index=True)

    # Relationships
    job = relationship("Job", back_populates="candidates")


class CandidateTimeline(Base):
    """
    Append-only stage history for a candidate.

    One row is written every time the candidate's stage changes.
    """

    __tablename__ = "candidate_timeline"

    id = Column(Integer, primary_key=True)
    candidate_id = Column(Integer, ForeignKey("candidates.id"), index=True)
    stage = Column(String, index=True)
    timestamp = Column(DateTime, default=utcnow, index=True)
    notes = Column(Text, nullable=True)

    candidate = relationship("Candidate")
