import json
import os
import sys
import tempfile
from pathlib import Path
from typing import Any, Dict, List

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from catalog.store import CatalogStore
from config.registry import OPENING_KEY, SUMMARY_KEY, TURN_KEY, bind_model
from config.settings import settings
from interview_session.engine import InterviewEngine
from interview_session.registry import SessionRegistry
from storage.migrate import migrate


COURSES = {
    "courses": [
        {
            "id": "py",
            "name": "Python Backend",
            "topics": [
                {"id": "apis", "name": "HTTP APIs", "subtopics": ["REST", "status codes"]},
                {"id": "db", "name": "Databases", "subtopics": ["indexes"]},
                {"id": "async", "name": "Concurrency", "subtopics": ["asyncio"]},
            ],
        }
    ]
}

PERSONAS = {
    "personas": [
        {
            "id": "mentor",
            "name": "Friendly Mentor",
            "style": "supportive",
            "description": "Warm and encouraging",
            "focusAreas": ["fundamentals"],
            "evaluationWeight": {"technical": 0.5, "communication": 0.3, "problemSolving": 0.2},
            "questionStyles": ["open-ended"],
        }
    ]
}

ROLES = {
    "genericRoles": [
        {"id": "junior", "name": "Junior Developer", "level": 1},
        {"id": "senior", "name": "Senior Engineer", "level": 3},
        {"id": "lead", "name": "Tech Lead", "baseLevel": "lead"},
    ],
    "courseRoles": {
        "py": [{"id": "sre", "name": "Backend SRE", "baseLevel": "senior"}],
    },
}


@pytest.fixture(autouse=True)
def tmp_db(monkeypatch):
    td = tempfile.TemporaryDirectory()
    db_path = os.path.join(td.name, "test.db")
    monkeypatch.setattr(settings, "DB_PATH", db_path, raising=False)
    migrate(db_path)
    try:
        yield db_path
    finally:
        td.cleanup()


@pytest.fixture
def catalog_dir(tmp_path, monkeypatch) -> Path:
    directory = tmp_path / "catalog"
    directory.mkdir()
    (directory / "courses.json").write_text(json.dumps(COURSES), encoding="utf-8")
    (directory / "personas.json").write_text(json.dumps(PERSONAS), encoding="utf-8")
    (directory / "roles.json").write_text(json.dumps(ROLES), encoding="utf-8")
    monkeypatch.setattr(settings, "CATALOG_DIR", str(directory), raising=False)
    return directory


class ScriptedInterviewer:
    """Stand-in for the three LLM generators; turn replies are queued per test."""

    def __init__(self) -> None:
        self.turns: List[Dict[str, Any]] = []
        self.calls: List[Dict[str, Any]] = []
        self.fail_next = False

    def queue(self, assessment=None, *, probing=False, topic="HTTP APIs", message="Next question?") -> None:
        self.turns.append(
            {
                "message": message,
                "currentTopic": topic,
                "assessmentOfLastAnswer": assessment,
                "isProbing": probing,
            }
        )

    def _record(self, kind: str, kwargs: Dict[str, Any]) -> None:
        self.calls.append({"kind": kind, **kwargs})
        if self.fail_next:
            self.fail_next = False
            raise RuntimeError("upstream unavailable")

    def opening(self, **kwargs: Any) -> Dict[str, Any]:
        self._record("opening", kwargs)
        return {"message": "Welcome! What does idempotency mean for HTTP APIs?", "currentTopic": "HTTP APIs"}

    def turn(self, **kwargs: Any) -> Dict[str, Any]:
        self._record("turn", kwargs)
        if self.turns:
            return self.turns.pop(0)
        return {"message": "Next question?", "currentTopic": "HTTP APIs", "assessmentOfLastAnswer": "good", "isProbing": False}

    def summary(self, **kwargs: Any) -> Dict[str, Any]:
        self._record("summary", kwargs)
        return {
            "score": 72,
            "overallFeedback": "Solid fundamentals.",
            "topicsCovered": ["HTTP APIs"],
            "strengths": ["Clear explanations"],
            "areasToImprove": ["Depth on caching"],
            "recommendedNextSteps": "Practice cache invalidation scenarios.",
        }


@pytest.fixture
def fake_models() -> ScriptedInterviewer:
    interviewer = ScriptedInterviewer()
    bind_model(OPENING_KEY, interviewer.opening)
    bind_model(TURN_KEY, interviewer.turn)
    bind_model(SUMMARY_KEY, interviewer.summary)
    return interviewer


@pytest.fixture
def engine(catalog_dir, fake_models) -> InterviewEngine:
    return InterviewEngine(SessionRegistry(), CatalogStore(catalog_dir))
