from talentflow.models import CandidateTimeline


def timeline_for(db_session, candidate_id):
    db_session.expire_all()
    return (
        db_session.query(CandidateTimeline)
        .filter(CandidateTimeline.candidate_id == candidate_id)
        .order_by(CandidateTimeline.id)
        .all()
    )


# ============== Listing ==============


def test_list_candidates_newest_first_with_job(client, make_job, make_candidate):
    job = make_job("Data Scientist")
    make_candidate("Old Applicant", job=job, age_days=10)
    make_candidate("New Applicant", job=job, age_days=1)

    body = client.get("/api/candidates").json()

    assert [c["name"] for c in body["candidates"]] == ["New Applicant", "Old Applicant"]
    assert body["candidates"][0]["job"]["title"] == "Data Scientist"
    assert body["candidates"][0]["jobId"] == job.id
    assert body["pagination"] == {"page": 1, "pageSize": 50, "total": 2, "totalPages": 1}


def test_list_candidates_job_is_null_when_missing(client, make_candidate):
    make_candidate("Orphan Applicant", job_id=999)

    candidate = client.get("/api/candidates").json()["candidates"][0]

    assert candidate["job"] is None


def test_list_candidates_search_name_or_email(client, make_candidate):
    make_candidate("Priya Sharma")
    make_candidate("John Smith", email="jsmith@example.org")

    by_name = client.get("/api/candidates", params={"search": "PRIYA"}).json()
    assert [c["name"] for c in by_name["candidates"]] == ["Priya Sharma"]

    by_email = client.get("/api/candidates", params={"search": "example.org"}).json()
    assert [c["name"] for c in by_email["candidates"]] == ["John Smith"]


def test_list_candidates_search_folds_accented_names(client, make_candidate):
    make_candidate("Émile Zola", email="emile@example.org")
    make_candidate("John Smith")

    body = client.get("/api/candidates", params={"search": "émile"}).json()
    assert [c["name"] for c in body["candidates"]] == ["Émile Zola"]

    upper = client.get("/api/candidates", params={"search": "ÉMILE"}).json()
    assert [c["name"] for c in upper["candidates"]] == ["Émile Zola"]
    assert upper["pagination"]["total"] == 1


def test_list_candidates_search_keeps_spaces(client, make_candidate):
    make_candidate("Priya Sharma")

    assert client.get("/api/candidates", params={"search": "a s"}).json()["pagination"]["total"] == 1
    assert client.get("/api/candidates", params={"search": " priya "}).json()["candidates"] == []


def test_list_candidates_search_treats_wildcards_literally(client, make_candidate):
    make_candidate("Priya Sharma")

    body = client.get("/api/candidates", params={"search": "%"}).json()

    assert body["candidates"] == []


def test_list_candidates_stage_filter_and_pages(client, make_candidate):
    for i in range(7):
        make_candidate(f"Tech Candidate {i}", stage="tech", age_days=i)
    make_candidate("Hired Candidate", stage="hired")

    body = client.get("/api/candidates", params={"stage": "tech", "page": 2, "pageSize": 5}).json()

    assert [c["name"] for c in body["candidates"]] == ["Tech Candidate 5", "Tech Candidate 6"]
    assert body["pagination"]["total"] == 7
    assert body["pagination"]["totalPages"] == 2


# ============== Detail ==============


def test_get_candidate(client, make_job, make_candidate):
    job = make_job("Mobile Developer")
    candidate = make_candidate("Kavya Nair", job=job, phone="+919876543210", experience=4)

    response = client.get(f"/api/candidates/{candidate.id}")

    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "Kavya Nair"
    assert body["experience"] == 4
    assert body["job"]["slug"] == "mobile-developer"


def test_get_missing_candidate(client):
    response = client.get("/api/candidates/999")

    assert response.status_code == 404
    assert response.json() == {"message": "Candidate not found"}


# ============== Update ==============


def test_stage_change_appends_one_timeline_entry(client, db_session, make_candidate):
    candidate = make_candidate("Arjun Rao", stage="tech")
    before = len(timeline_for(db_session, candidate.id))

    response = client.patch(f"/api/candidates/{candidate.id}", json={"stage": "offer"})

    assert response.status_code == 200
    assert response.json()["stage"] == "offer"
    entries = timeline_for(db_session, candidate.id)
    assert len(entries) == before + 1
    assert entries[-1].stage == "offer"
    assert entries[-1].notes == "Stage updated from tech to offer"


def test_stage_change_uses_explicit_notes(client, db_session, make_candidate):
    candidate = make_candidate("Meera Iyer", stage="screen")

    client.patch(
        f"/api/candidates/{candidate.id}",
        json={"stage": "rejected", "notes": "Withdrew application"},
    )

    entries = timeline_for(db_session, candidate.id)
    assert entries[-1].stage == "rejected"
    assert entries[-1].notes == "Withdrew application"


def test_non_stage_update_appends_nothing(client, db_session, make_candidate):
    candidate = make_candidate("Rohan Das", stage="screen")
    before = len(timeline_for(db_session, candidate.id))

    response = client.patch(f"/api/candidates/{candidate.id}", json={"email": "rohan@new.com"})

    assert response.json()["email"] == "rohan@new.com"
    assert len(timeline_for(db_session, candidate.id)) == before


def test_same_stage_appends_nothing(client, db_session, make_candidate):
    candidate = make_candidate("Diya Menon", stage="tech")
    before = len(timeline_for(db_session, candidate.id))

    client.patch(f"/api/candidates/{candidate.id}", json={"stage": "tech"})

    assert len(timeline_for(db_session, candidate.id)) == before


def test_update_stamps_updated_at(client, make_candidate):
    candidate = make_candidate("Sai Ghosh", age_days=5)

    body = client.patch(f"/api/candidates/{candidate.id}", json={"stage": "screen"}).json()

    assert body["updatedAt"] > body["createdAt"]


def test_update_rejects_unknown_stage(client, make_candidate):
    candidate = make_candidate("Ira Pillai")

    response = client.patch(f"/api/candidates/{candidate.id}", json={"stage": "interview"})

    assert response.status_code == 422


def test_update_missing_candidate(client):
    response = client.patch("/api/candidates/999", json={"stage": "offer"})

    assert response.status_code == 404
    assert response.json() == {"message": "Candidate not found"}


def test_update_surfaces_simulated_network_error(client, db_session, network, make_candidate):
    candidate = make_candidate("Dev Banerjee", stage="applied")
    network.enabled = True
    network.min_delay_ms = network.max_delay_ms = 0
    network.failure_probability = 1.0

    response = client.patch(f"/api/candidates/{candidate.id}", json={"stage": "screen"})

    assert response.status_code == 500
    assert response.json()["message"] == "Failed to update candidate: Simulated network error"
    assert len(timeline_for(db_session, candidate.id)) == 1


# ============== Timeline ==============


def test_timeline_is_oldest_first(client, make_candidate):
    candidate = make_candidate("Riya Joshi", stage="applied", age_days=3)
    client.patch(f"/api/candidates/{candidate.id}", json={"stage": "screen"})
    client.patch(f"/api/candidates/{candidate.id}", json={"stage": "tech"})

    entries = client.get(f"/api/candidates/{candidate.id}/timeline").json()

    assert [entry["stage"] for entry in entries] == ["applied", "screen", "tech"]
    assert all(entry["candidateId"] == candidate.id for entry in entries)
    timestamps = [entry["timestamp"] for entry in entries]
    assert timestamps == sorted(timestamps)


def test_timeline_for_unknown_candidate_is_empty(client):
    assert client.get("/api/candidates/999/timeline").json() == []
