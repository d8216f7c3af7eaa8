# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-20
# Description: test_api_routers.py
# -----------------------------------------------------------------------------
from types import SimpleNamespace

import pytest
from starlette.testclient import TestClient

from api import dependencies
from api.main import app
from conftest import FakeEmbedder, FakeModerationsAPI
from health.SmokeTestRunner import SmokeTestRunner
from learning.AnchorPromotionJob import AnchorPromotionJob
from learning.JsonlCorrectionStore import JsonlCorrectionStore
from moderation.OpenAIModeration import OpenAIModeration
from services.CategoryRecommendationService import CategoryRecommendationService
from services.HealthService import HealthService
from vectorstore.AnchorCache import AnchorCache
from vectorstore.CategoryVectorStore import CategoryVectorStore


@pytest.fixture
def client(cfg, food_travel_source, fake_embedder, tmp_path):
    corrections = JsonlCorrectionStore(tmp_path / "learning-data.jsonl")
    cache = AnchorCache(food_travel_source, ttl_seconds=0)
    vector_store = CategoryVectorStore(food_travel_source, fake_embedder, cache=cache)
    recommendation = CategoryRecommendationService(
        vector_store=vector_store,
        corrections=corrections,
        min_score=0.75,
        default_category="Другое",
    )
    runner = SmokeTestRunner(embedder=fake_embedder, anchor_source=food_travel_source, corrections=corrections)
    moderation = OpenAIModeration(
        cfg,
        client=SimpleNamespace(moderations=FakeModerationsAPI(results=[SimpleNamespace(flagged=False)])),
    )

    app.dependency_overrides[dependencies.get_recommendation_service] = lambda: recommendation
    app.dependency_overrides[dependencies.get_anchor_cache] = lambda: cache
    app.dependency_overrides[dependencies.get_correction_store] = lambda: corrections
    app.dependency_overrides[dependencies.get_promotion_job] = lambda: AnchorPromotionJob(
        corrections, vector_store, fake_embedder
    )
    app.dependency_overrides[dependencies.get_health_service] = lambda: HealthService(test_runner=runner)
    app.dependency_overrides[dependencies.get_moderation] = lambda: moderation

    yield TestClient(app)

    app.dependency_overrides.clear()


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_deep_health_skips_fake_embedding_failures(client):
    resp = client.get("/health/deep", params={"run_embedding": "false"})
    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["status"] == "ok"
    assert set(data["results"]) == {"anchor_store", "anchors_present", "corrections_log"}


def test_suggest(client):
    resp = client.post("/categories/suggest", json={"text": "lunch at evos"})
    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["category"] == "Food"
    assert data["matched"] is True
    assert data["score"] == pytest.approx(1.0)


def test_suggest_blank_text_rejected(client):
    assert client.post("/categories/suggest", json={"text": "   "}).status_code == 400
    assert client.post("/categories/suggest", json={"text": ""}).status_code == 422


def test_refresh(client):
    resp = client.post("/categories/refresh")
    assert resp.status_code == 200, resp.text
    assert resp.json() == {"anchors": 2, "dimension": 2}


def test_post_and_list_corrections(client):
    body = {
        "text": "такси yandex go",
        "original_guess": {"amount": 0, "category": "Другое", "type": "expense", "confidence": 0.4},
        "corrected_fields": {"category": "Транспорт", "merchant": "Yandex Go"},
        "source": "user-42",
        "weight": 1.7,
    }
    resp = client.post("/corrections", json=body)
    assert resp.status_code == 201, resp.text
    assert resp.json()["weight"] == 1.0

    resp = client.get("/corrections", params={"source": "user-42"})
    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["count"] == 1
    assert data["corrections"][0]["corrected_fields"]["merchant"] == "Yandex Go"

    assert client.get("/corrections", params={"source": "nobody"}).json()["count"] == 0


def test_unencodable_correction_is_service_unavailable(client):
    body = (
        '{"text": "bad \\ud800", "original_guess": {}, '
        '"corrected_fields": {"category": "Еда"}, "source": "user-42"}'
    )
    resp = client.post(
        "/corrections",
        content=body.encode("utf-8"),
        headers={"content-type": "application/json"},
    )
    assert resp.status_code == 503, resp.text


def test_list_corrections_with_free_form_type(client, tmp_path):
    store = JsonlCorrectionStore(tmp_path / "learning-data.jsonl")
    store.record_correction("перевод другу", {"type": "transfer"}, {"type": "expense"}, "user-7", 0.6)

    resp = client.get("/corrections", params={"source": "user-7"})
    assert resp.status_code == 200, resp.text
    assert resp.json()["corrections"][0]["original_guess"]["type"] == "transfer"


def test_promote_endpoint(client):
    resp = client.post("/categories/promote")
    assert resp.status_code == 200, resp.text
    assert resp.json()["anchors_written"] == 0


def test_moderation(client):
    resp = client.post("/moderation", json={"text": "hello"})
    assert resp.status_code == 200, resp.text
    assert resp.json() == {"outcome": "allowed", "categories": []}
