from talentflow.models.user import User
from talentflow.models.job import Job
from talentflow.models.candidate import Candidate, CandidateTimeline, STAGES
from talentflow.models.assessment import Assessment, AssessmentResponse, QUESTION_TYPES

__all__ = [
    "User",
    "Job",
    "Candidate",
    "CandidateTimeline",
    "Assessment",
    "AssessmentResponse",
    "STAGES",
    "QUESTION_TYPES",
]
