"""API tests for session completion, performance summaries and trends."""

from interview_prep.components.scoring.rules import PRESET_WEIGHTS
from interview_prep.components.scoring.schemas import ScoreBreakdown
from interview_prep.components.scoring.service import assess_level, calculate_overall_score
from test_api_sessions import create_session_via_api

ANSWER = (
    "In my previous role the situation was a slow checkout page. My task was to speed it up. "
    "First, I analyzed the queries, then I implemented caching. The result was a 35% faster page."
)


def _complete_answered_session(client, user_id="u1", **overrides):
    session = create_session_via_api(client, user_id=user_id, **overrides).json()
    for question in session["questions"]:
        client.put(
            f"/api/v1/sessions/{session['id']}/responses",
            json={"question_id": question["id"], "response": ANSWER, "duration_seconds": 50},
        )
    return client.post("/api/v1/performance", json={"user_id": user_id, "session_id": session["id"]})


def test_complete_session(client):
    resp = _complete_answered_session(client)
    assert resp.status_code == 200, resp.text
    payload = resp.json()
    assert 0 <= payload["detailed_score"]["overall"] <= 100
    assert payload["session_stats"]["completion_rate"] == 100.0

    resp = client.get(f"/api/v1/sessions/{payload['session_id']}")
    assert resp.json()["status"] == "completed"


def test_complete_unknown_or_foreign_session_returns_404(client):
    assert client.post("/api/v1/performance", json={"user_id": "u1", "session_id": "missing"}).status_code == 404
    sid = create_session_via_api(client).json()["id"]
    resp = client.post("/api/v1/performance", json={"user_id": "intruder", "session_id": sid})
    assert resp.status_code == 404


def test_performance_for_new_user(client):
    resp = client.get("/api/v1/performance", params={"user_id": "new-user"})
    assert resp.status_code == 200, resp.text
    payload = resp.json()
    summary = payload["performance_summary"]
    assert summary["profile"]["total_sessions"] == 0
    assert summary["best_type"] == "mixed"
    assert summary["benchmark"]["interview_type"] == "behavioral"
    assert payload["recommendation_accuracy"]["total_recommendations"] == 0


def test_performance_after_sessions(client):
    _complete_answered_session(client)
    _complete_answered_session(client, type="behavioral")
    resp = client.get("/api/v1/performance", params={"user_id": "u1"})
    assert resp.status_code == 200, resp.text
    summary = resp.json()["performance_summary"]
    assert summary["profile"]["total_sessions"] == 2
    assert summary["profile"]["performance_by_type"]["behavioral"]["session_count"] == 1
    assert len(summary["recent_trends"]) == 9


def test_trends_endpoint(client):
    assert client.get("/api/v1/performance/u1/trends").json() == []
    _complete_answered_session(client)
    _complete_answered_session(client)
    resp = client.get("/api/v1/performance/u1/trends")
    assert resp.status_code == 200, resp.text
    trends = resp.json()
    assert trends[0]["metric"] == "overall_score"
    assert trends[0]["trend"] == "stable"


def test_benchmarks_endpoint(client):
    resp = client.get("/api/v1/performance/benchmarks", params={"difficulty": "hard", "interview_type": "technical"})
    assert resp.status_code == 200, resp.text
    payload = resp.json()
    assert payload["average_overall_score"] == 64
    assert set(payload["percentiles"]) == {"25th", "50th", "75th", "90th"}


def test_benchmarks_fallback(client):
    resp = client.get("/api/v1/performance/benchmarks", params={"difficulty": "easy", "interview_type": "mixed"})
    assert resp.status_code == 200, resp.text
    assert (resp.json()["difficulty"], resp.json()["interview_type"]) == ("medium", "behavioral")


def test_session_is_scored_only_once(client):
    resp = _complete_answered_session(client)
    assert resp.status_code == 200, resp.text
    session_id = resp.json()["session_id"]

    again = client.post("/api/v1/performance", json={"user_id": "u1", "session_id": session_id})
    assert again.status_code == 404

    summary = client.get("/api/v1/performance", params={"user_id": "u1"}).json()["performance_summary"]
    assert summary["profile"]["total_sessions"] == 1


def test_completion_uses_stored_scoring_weights(client):
    resp = client.post("/api/v1/scoring/weights/u1/presets/technical")
    assert resp.status_code == 200, resp.text

    resp = _complete_answered_session(client, role="Backend Engineer")
    assert resp.status_code == 200, resp.text
    score = resp.json()["detailed_score"]
    breakdown = ScoreBreakdown(**score["breakdown"])
    technical = PRESET_WEIGHTS["technical"]
    assert score["overall"] == calculate_overall_score(breakdown, technical)
    assert score["level_assessment"] == assess_level(breakdown, "Backend Engineer", technical)
