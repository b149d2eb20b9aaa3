import random

from talentflow.models import Assessment, AssessmentResponse
from talentflow.services.assessments import MAX_SCORE, MIN_SCORE, synthetic_score

SECTIONS = [
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
    }
]


def test_get_assessment_is_null_when_missing(client, make_job):
    job = make_job("Data Scientist")

    response = client.get(f"/api/assessments/{job.id}")

    assert response.status_code == 200
    assert response.json() is None


def test_put_creates_then_updates_the_same_assessment(client, db_session, make_job):
    job = make_job("Data Scientist")

    created = client.put(
        f"/api/assessments/{job.id}",
        json={"title": "Screening", "sections": SECTIONS, "isActive": True},
    ).json()
    assert created["jobId"] == job.id
    assert created["createdAt"] is not None
    assert created["updatedAt"] is not None

    updated = client.put(f"/api/assessments/{job.id}", json={"title": "Screening v2"}).json()

    assert updated["id"] == created["id"]
    assert updated["title"] == "Screening v2"
    assert updated["sections"] == created["sections"]
    assert updated["updatedAt"] >= created["updatedAt"]
    assert db_session.query(Assessment).filter(Assessment.job_id == job.id).count() == 1


def test_sections_round_trip_with_camel_case_validation(client, make_job):
    job = make_job("Data Scientist")
    client.put(f"/api/assessments/{job.id}", json={"title": "Screening", "sections": SECTIONS})

    body = client.get(f"/api/assessments/{job.id}").json()

    question = body["sections"][0]["questions"][1]
    assert question["type"] == "short-text"
    assert question["validation"]["maxLength"] == 100


def test_put_rejects_unknown_question_type(client, make_job):
    job = make_job("Data Scientist")
    sections = [{"id": "s", "title": "S", "questions": [{"id": "q", "type": "essay"}]}]

    response = client.put(f"/api/assessments/{job.id}", json={"sections": sections})

    assert response.status_code == 422


def test_put_surfaces_simulated_network_error(client, db_session, network, make_job):
    job = make_job("Data Scientist")
    network.enabled = True
    network.min_delay_ms = network.max_delay_ms = 0
    network.failure_probability = 1.0

    response = client.put(f"/api/assessments/{job.id}", json={"title": "Screening"})

    assert response.status_code == 500
    assert response.json() == {"message": "Failed to save assessment: Simulated network error"}
    assert db_session.query(Assessment).count() == 0


def test_submit_records_scored_response(client, db_session, make_job, make_candidate):
    job = make_job("Data Scientist")
    candidate = make_candidate("Ananya Shah", job=job)
    assessment = client.put(f"/api/assessments/{job.id}", json={"title": "Screening"}).json()

    response = client.post(
        f"/api/assessments/{job.id}/submit",
        json={"candidateId": candidate.id, "responses": {"exp_1": 4, "exp_2": "Analyst"}},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Assessment submitted successfully"

    stored = db_session.get(AssessmentResponse, body["id"])
    assert stored.assessment_id == assessment["id"]
    assert stored.candidate_id == candidate.id
    assert stored.responses == {"exp_1": 4, "exp_2": "Analyst"}
    assert MIN_SCORE <= stored.score <= MAX_SCORE


def test_submit_without_assessment_is_still_recorded(client, db_session, make_job, make_candidate):
    job = make_job("Data Scientist")
    candidate = make_candidate("Ananya Shah", job=job)

    response = client.post(
        f"/api/assessments/{job.id}/submit",
        json={"candidateId": candidate.id, "responses": {"exp_1": 2}},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True

    stored = db_session.get(AssessmentResponse, body["id"])
    assert stored.assessment_id is None
    assert stored.candidate_id == candidate.id
    assert stored.responses == {"exp_1": 2}
    assert db_session.query(AssessmentResponse).count() == 1


def test_synthetic_score_range():
    rng = random.Random(7)
    scores = {synthetic_score(rng) for _ in range(2000)}

    assert min(scores) == MIN_SCORE
    assert max(scores) == MAX_SCORE
