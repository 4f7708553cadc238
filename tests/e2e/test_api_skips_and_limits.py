from config.settings import settings


def _start(client) -> str:
    resp = client.post("/api/interview/start", json={"courseId": "py", "selectedTopics": ["apis", "db"]})
    assert resp.status_code == 200
    return resp.json()["session_id"]


def test_third_skip_on_topic_signals_auto_end(client):
    session_id = _start(client)
    skip = {"sessionId": session_id, "message": "skip", "skipped": True}

    for expected in (1, 2):
        body = client.post("/api/interview/respond", json=skip).json()
        assert body["metrics"]["skipped_count"] == expected
        assert body["assessment"] is None

    signal = client.post("/api/interview/respond", json=skip).json()
    assert signal["auto_end"] is True
    assert signal["reason"] == "topic_skip_limit"
    assert signal["skipped_count"] == 3
    assert signal["topic_id"] == "apis"
    assert signal["message"].startswith("Interview ended: You've skipped 3 questions on \"HTTP APIs\"")

    summary = client.post("/api/interview/end", json={"sessionId": session_id}).json()
    assert summary["metrics"]["skipped_count"] == 3


def test_daily_limit_blocks_start(client, monkeypatch):
    monkeypatch.setattr(settings, "INTERVIEW_DAILY_QUESTION_LIMIT", 1)
    _start(client)

    status = client.get("/api/interview/eligibility").json()
    assert status["within_daily_limit"] is False
    assert status["today_question_count"] == 1

    resp = client.post("/api/interview/start", json={"courseId": "py"})
    assert resp.status_code == 403
    detail = resp.json()["detail"]
    assert detail["eligible"] is False
    assert detail["daily_limit_reached"] is True


def test_eligibility_defaults(client):
    status = client.get("/api/interview/eligibility").json()
    assert status["daily_limit"] == settings.INTERVIEW_DAILY_QUESTION_LIMIT
    assert status["within_daily_limit"] is True
