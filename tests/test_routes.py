import pytest
from fastapi.testclient import TestClient

from db.database import get_db
from db.store import RecordStore
from main import app
from routes.drills import get_drill_generator

from conftest import FakeDrillGenerator


@pytest.fixture
def fake_generator():
    return FakeDrillGenerator()


@pytest.fixture
def client(store, fake_generator):
    app.dependency_overrides[get_drill_generator] = lambda: fake_generator
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_home(client):
    assert client.get("/").json()["status"] == "ok"


def test_mission_is_stable_within_a_day(client):
    first = client.get("/vocab/ada/mission")
    second = client.get("/vocab/ada/mission")

    assert first.status_code == 200
    mission = first.json()["mission"]
    assert len(mission["words"]) == 10
    assert mission["progress"] == 0
    assert second.json()["mission"]["words"] == mission["words"]
    assert first.json()["period"] is None


def test_review_updates_progress_and_stats(client):
    word = client.get("/vocab/ada/mission").json()["mission"]["words"][0]

    response = client.post("/vocab/ada/review", json={"word": word, "is_correct": True})

    assert response.status_code == 200
    progress = response.json()["progress"]
    assert progress["word"] == word.lower()
    assert progress["review_count"] == 1
    assert progress["interval"] == 2
    assert progress["status"] == "learning"
    assert response.json()["mission_progress"] == 0

    stats = client.get("/vocab/ada/stats").json()
    assert stats["total"] == 1
    assert stats["accuracy"] == 100


def test_review_rejects_blank_word(client):
    response = client.post("/vocab/ada/review", json={"word": "", "is_correct": True})

    assert response.status_code == 422


def test_plan_lifecycle(client):
    assert client.get("/plan/ada").status_code == 404

    created = client.post("/plan/ada", json={"period": "intensive"})
    assert created.status_code == 200
    assert created.json()["daily_goal"] == 40

    mission = client.get("/vocab/ada/mission").json()
    assert mission["period"] == "intensive"
    assert mission["daily_goal"] == 40
    assert len(mission["mission"]["words"]) == 22

    status = client.get("/plan/ada").json()
    assert status["mastered"] == 0
    assert status["progress"]["total_days"] == 14
    assert status["adjustment"]["should_adjust"] is False


def test_plan_review_uses_period_intervals(client):
    client.post("/plan/ada", json={"period": "intensive"})

    client.post("/vocab/ada/review", json={"word": "alacrity", "is_correct": True})
    response = client.post("/vocab/ada/review", json={"word": "alacrity", "is_correct": True})

    assert response.json()["progress"]["interval"] == 3


def test_plan_requires_exactly_one_source(client):
    both = client.post("/plan/ada", json={"period": "relaxed", "target_date": "2030-01-01"})
    neither = client.post("/plan/ada", json={})

    assert both.status_code == 422
    assert neither.status_code == 422


def test_periods_listing(client):
    periods = client.get("/plan/periods").json()

    assert set(periods) == {"intensive", "accelerated", "balanced", "relaxed"}
    assert periods["balanced"]["total_daily"] == 16


def test_daily_drills_are_cached(client, fake_generator):
    first = client.post("/drills/ada/daily", json={"words": ["Alacrity", "bane"]})
    second = client.post("/drills/ada/daily", json={"words": ["alacrity", "bane"]})

    assert first.status_code == 200
    assert set(first.json()["drills"]) == {"alacrity", "bane"}
    assert first.json()["drills"]["bane"]["correctAnswer"] == "bane"
    assert second.json() == first.json()
    assert fake_generator.calls == [["alacrity", "bane"]]

    cached = client.get("/drills/ada/alacrity")
    assert cached.status_code == 200
    assert cached.json()["correctAnswer"] == "alacrity"
    assert client.get("/drills/ada/cajole").status_code == 404

    assert client.get("/drills/ada/stats").json()["cached_today"] == 2
    assert client.delete("/drills/ada").json() == {"removed": 2}


def test_daily_drills_require_words(client):
    assert client.post("/drills/ada/daily", json={"words": []}).status_code == 422


def test_generator_failure_returns_bad_gateway(client, fake_generator):
    fake_generator.fail = True

    response = client.post("/drills/ada/daily", json={"words": ["alacrity"]})

    assert response.status_code == 502
    assert response.json()["error"] == "DrillGenerationError"
    assert response.json()["details"]["words"] == ["alacrity"]


def test_wipe_removes_everything_for_user(client):
    client.get("/vocab/ada/mission")
    client.post("/vocab/ada/review", json={"word": "alacrity", "is_correct": False})
    client.post("/drills/ada/daily", json={"words": ["alacrity"]})
    client.post("/plan/ada", json={"period": "balanced"})

    removed = client.delete("/vocab/ada").json()["removed"]

    assert removed == {
        "word_progress": 1,
        "daily_missions": 1,
        "drill_cache": 1,
        "study_plans": 1,
    }
    assert client.get("/plan/ada").status_code == 404
    assert client.get("/vocab/ada/stats").json()["total"] == 0


def test_mission_survives_store_outage(client, tmp_path):
    app.dependency_overrides[get_db] = lambda: RecordStore(tmp_path / "missing" / "actcoach.db")

    response = client.get("/vocab/ada/mission")

    assert response.status_code == 200
    assert len(response.json()["mission"]["words"]) == 10
    assert response.json()["period"] is None
