from sqlalchemy import Column, Integer, String, Boolean, ForeignKey, JSON, DateTime
from sqlalchemy.orm import relationship

from talentflow.db.base import Base, utcnow


QUESTION_TYPES = ["single-choice", "multi-choice", "short-text", "long-text", "numeric", "file-upload"]


class Assessment(Base):
    """
    Assessment attached to a job. There is at most one per job.

    Sections are stored as JSON:
    [{ "id": "technical", "title": "...", "questions": [
        { "id": "tech_1", "type": "single-choice", "question": "...",
          "required": true, "options": [...], "validation": {...} }
    ]}]
    """

    __tablename__ = "assessments"

    id = Column(Integer, primary_key=True)
    job_id = Column(Integer, ForeignKey("jobs.id"), index=True)
    title = Column(String, index=True)
    sections = Column(JSON, default=list)
    is_active = Column(Boolean, default=True)

    created_at = Column(DateTime, default=utcnow, index=True)
    updated_at = Column(DateTime, nullable=True)

    # Relationships
    job = relationship("Job", back_populates="assessment")
    responses = relationship("AssessmentResponse", back_populates="assessment")


class AssessmentResponse(Base):
    """Submitted answers for an assessment, scored on submission."""

    __tablename__ = "assessment_responses"

    id = Column(Integer, primary_key=True)
    assessment_id = Column(Integer, ForeignKey("assessments.id"), nullable=True, index=True)
    candidate_id = Column(Integer, ForeignKey("candidates.id"), index=True)

    # Format: { "<question id>": <answer> }
    responses = Column(JSON, default=dict)
    submitted_at = Column(DateTime, default=utcnow, index=True)
    score = Column(Integer)  # 0-100

    assessment = relationship("Assessment", back_populates="responses")
