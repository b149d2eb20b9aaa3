"""
Seed Generator.

Builds a coherent demo dataset (users, jobs, candidates with stage history,
sample assessments) and writes it into an empty store.

Generation is a pure function of a random source and a reference time, so
tests can pin both. Persistence is guarded by an emptiness check on the jobs
table, which makes seeding safe to call on every startup.
"""

import copy
import logging
import random
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Optional

from sqlalchemy.orm import Session

from talentflow.core.security import get_password_hash
from talentflow.db import store
from talentflow.db.base import utcnow
from talentflow.models import User, Job, Candidate, CandidateTimeline, Assessment, STAGES
from talentflow.services.jobs import slugify

# Handlers come from the application (main.py lifespan or seed_db.py)
logger = logging.getLogger("seed")


# ============== Fixed Catalogues ==============

DEMO_USERS = [
    {"email": "admin@talentflow.com", "password": "admin123", "role": "admin", "name": "Admin User"},
    {"email": "hr@talentflow.com", "password": "hr123", "role": "hr", "name": "HR Manager"},
    {"email": "demo@talentflow.com", "password": "demo123", "role": "hr", "name": "Demo User"},
]

JOB_TITLES = [
    "Senior React Developer", "Backend Node.js Engineer", "DevOps Specialist", "UI/UX Designer",
    "Product Manager", "Data Scientist", "Mobile Developer", "QA Automation Engineer",
    "Fullstack JavaScript Developer", "Machine Learning Engineer", "Technical Writer",
    "Cybersecurity Engineer", "Business Analyst", "Scrum Master", "Cloud Solutions Architect",
    "Frontend Vue.js Developer", "Python Backend Developer", "Java Spring Developer",
    "Sales Development Representative", "Digital Marketing Manager", "Customer Success Manager",
    "Operations Coordinator", "Finance Business Analyst", "HR Business Partner",
    "Content Marketing Specialist",
]

# Titles before this index draw from TECH_TAGS, the rest from NON_TECH_TAGS
TECH_TITLE_COUNT = 15

TECH_TAGS = ["React", "Node.js", "Python", "Java", "AWS", "Docker", "Kubernetes", "TypeScript", "Vue.js", "MongoDB"]
NON_TECH_TAGS = ["Communication", "Leadership", "Project Management", "Analytics", "Strategy", "Sales"]

FIRST_NAMES = [
    "Aarav", "Vivaan", "Reyansh", "Muhammad", "Sai", "Vihaan", "Aadhya", "Ananya", "Diya", "Ira",
    "John", "Emma", "Liam", "Olivia", "William", "Ava", "James", "Isabella", "Oliver", "Sophia",
    "Raj", "Priya", "Arjun", "Kavya", "Rohan", "Shreya", "Kiran", "Meera", "Dev", "Riya",
]
LAST_NAMES = [
    "Patel", "Sharma", "Gupta", "Singh", "Kumar", "Shah", "Mehta", "Joshi", "Agarwal", "Verma",
    "Smith", "Johnson", "Williams", "Brown", "Jones", "Garcia", "Miller", "Davis", "Rodriguez", "Martinez",
    "Reddy", "Rao", "Nair", "Iyer", "Menon", "Pillai", "Das", "Ghosh", "Banerjee", "Chakraborty",
]

# One note per entry in STAGES
STAGE_NOTES = [
    "Application submitted via careers page",
    "Initial screening completed",
    "Technical interview scheduled",
    "Final round completed",
    "Offer extended and accepted",
    "Application reviewed and closed",
]

ASSESSMENT_JOB_COUNT = 5
JOB_AGE_DAYS = 90
CANDIDATE_AGE_DAYS = 60
DEFAULT_CANDIDATE_COUNT = 1000

ASSESSMENT_SECTIONS = [
    {
        "id": "technical",
        "title": "Technical Knowledge",
        "questions": [
            {
                "id": "tech_1",
                "type": "single-choice",
                "question": "What is the virtual DOM in React?",
                "required": True,
                "options": [
                    "A lightweight copy of the real DOM",
                    "A database for storing component state",
                    "A CSS framework for styling",
                    "A testing library for React",
                ],
            },
            {
                "id": "tech_2",
                "type": "multi-choice",
                "question": "Which of the following are JavaScript ES6 features?",
                "required": True,
                "options": ["Arrow functions", "Template literals", "Destructuring", "Classes"],
            },
            {
                "id": "tech_3",
                "type": "long-text",
                "question": "Explain the concept of closures in JavaScript with an example.",
                "required": True,
                "validation": {"maxLength": 1000},
            },
        ],
    },
    {
        "id": "experience",
        "title": "Professional Experience",
        "questions": [
            {
                "id": "exp_1",
                "type": "numeric",
                "question": "How many years of professional experience do you have?",
                "required": True,
                "validation": {"min": 0, "max": 20},
            },
            {
                "id": "exp_2",
                "type": "short-text",
                "question": "What is your current role/designation?",
                "required": True,
                "validation": {"maxLength": 100},
            },
        ],
    },
]


@dataclass
class SeedData:
    """
    Generated rows, not yet persisted.

    Candidates reference jobs by ``job_index`` and timeline entries reference
    candidates by ``candidate_index``; keys are resolved at insert time.
    """

    users: list[dict[str, Any]] = field(default_factory=list)
    jobs: list[dict[str, Any]] = field(default_factory=list)
    candidates: list[dict[str, Any]] = field(default_factory=list)
    timeline: list[dict[str, Any]] = field(default_factory=list)
    assessments: list[dict[str, Any]] = field(default_factory=list)


# ============== Generation (pure) ==============


def _random_past(rng: random.Random, now: datetime, max_days: int) -> datetime:
    return now - timedelta(seconds=rng.random() * max_days * 24 * 60 * 60)


def generate_jobs(rng: random.Random, now: datetime) -> list[dict[str, Any]]:
    jobs = []
    for index, title in enumerate(JOB_TITLES):
        if index < TECH_TITLE_COUNT:
            tags = TECH_TAGS[: rng.randint(2, 5)]
        else:
            tags = NON_TECH_TAGS[: rng.randint(1, 3)]

        jobs.append({
            "title": title,
            "slug": slugify(title),
            "status": "active" if rng.random() > 0.25 else "archived",
            "tags": tags,
            "order": index,
            "created_at": _random_past(rng, now, JOB_AGE_DAYS),
            "description": (
                f"Exciting opportunity for a {title} to join our innovative team "
                "and work on cutting-edge projects."
            ),
        })
    return jobs


def generate_candidates(
    rng: random.Random,
    now: datetime,
    job_count: int,
    count: int = DEFAULT_CANDIDATE_COUNT,
) -> list[dict[str, Any]]:
    candidates = []
    for i in range(count):
        first_name = rng.choice(FIRST_NAMES)
        last_name = rng.choice(LAST_NAMES)
        created_at = _random_past(rng, now, CANDIDATE_AGE_DAYS)

        candidates.append({
            "name": f"{first_name} {last_name}",
            # counter suffix keeps emails unique across repeated names
            "email": f"{first_name.lower()}.{last_name.lower()}{i + 1}@email.com",
            "job_index": rng.randrange(job_count),
            "stage": rng.choice(STAGES),
            "created_at": created_at,
            "updated_at": created_at,
            "phone": f"+91{rng.randint(1000000000, 9999999999)}",
            "experience": rng.randint(1, 10),
        })
    return candidates


def derive_timeline(candidate_index: int, candidate: dict[str, Any]) -> list[dict[str, Any]]:
    """One entry per stage up to and including the candidate's current stage, a day apart."""
    stage_index = STAGES.index(candidate["stage"])
    return [
        {
            "candidate_index": candidate_index,
            "stage": STAGES[i],
            "timestamp": candidate["created_at"] + timedelta(days=i),
            "notes": STAGE_NOTES[i],
        }
        for i in range(stage_index + 1)
    ]


def generate_assessments(jobs: list[dict[str, Any]], now: datetime) -> list[dict[str, Any]]:
    return [
        {
            "job_index": index,
            "title": f"Technical Assessment - {job['title']}",
            "sections": copy.deepcopy(ASSESSMENT_SECTIONS),
            "created_at": now,
            "is_active": True,
        }
        for index, job in enumerate(jobs[:ASSESSMENT_JOB_COUNT])
    ]


def generate_seed_data(
    rng: random.Random,
    now: datetime,
    candidate_count: int = DEFAULT_CANDIDATE_COUNT,
) -> SeedData:
    """Build the full demo dataset from an explicit random source."""
    jobs = generate_jobs(rng, now)
    candidates = generate_candidates(rng, now, len(jobs), candidate_count)

    timeline = []
    for index, candidate in enumerate(candidates):
        timeline.extend(derive_timeline(index, candidate))

    return SeedData(
        users=[dict(user) for user in DEMO_USERS],
        jobs=jobs,
        candidates=candidates,
        timeline=timeline,
        assessments=generate_assessments(jobs, now),
    )


# ============== Persistence ==============


def seed_database(
    db: Session,
    rng: Optional[random.Random] = None,
    now: Optional[datetime] = None,
    candidate_count: int = DEFAULT_CANDIDATE_COUNT,
) -> bool:
    """
    Populate an empty store.

    Returns True when data was written, False when the store already had jobs
    or generation failed. Each table is committed as it is written, so a
    failure part-way leaves the earlier tables in place.
    """
    try:
        if store.count(db, Job) > 0:
            logger.info("Database already seeded. Skipping...")
            return False

        logger.info("🌱 Generating seed data...")
        data = generate_seed_data(rng or random.Random(), now or utcnow(), candidate_count)

        store.bulk_add(db, [
            User(
                email=user["email"],
                hashed_password=get_password_hash(user["password"]),
                role=user["role"],
                name=user["name"],
            )
            for user in data.users
        ])
        db.commit()

        job_ids = store.bulk_add(db, [Job(**job) for job in data.jobs], return_keys=True)
        db.commit()

        candidate_ids = store.bulk_add(
            db,
            [
                Candidate(
                    job_id=job_ids[row["job_index"]],
                    **{key: value for key, value in row.items() if key != "job_index"},
                )
                for row in data.candidates
            ],
            return_keys=True,
        )
        db.commit()

        store.bulk_add(db, [
            CandidateTimeline(
                candidate_id=candidate_ids[entry["candidate_index"]],
                stage=entry["stage"],
                timestamp=entry["timestamp"],
                notes=entry["notes"],
            )
            for entry in data.timeline
        ])
        db.commit()

        for row in data.assessments:
            store.add(db, Assessment(
                job_id=job_ids[row["job_index"]],
                title=row["title"],
                sections=row["sections"],
                created_at=row["created_at"],
                is_active=row["is_active"],
            ))
        db.commit()

        logger.info(
            f"✅ Seed data generated: {len(data.users)} users, {len(job_ids)} jobs, "
            f"{len(candidate_ids)} candidates, {len(data.timeline)} timeline entries, "
            f"{len(data.assessments)} assessments"
        )
        return True
    except Exception:
        db.rollback()
        logger.exception("❌ Error generating seed data")
        return False
