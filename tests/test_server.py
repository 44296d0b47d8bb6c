"""Tests for the HTTP API."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from sentiment_bayes.classifier import NaiveBayesClassifier
from sentiment_bayes.server import create_app


@pytest.fixture
def client(review_classifier):
    """Create a test client with lifespan management."""
    with TestClient(create_app(review_classifier)) as c:
        yield c


class TestHealthEndpoint:
    def test_health_returns_ok(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["classes"] == ["negative", "positive"]
        assert data["total_docs"] == 20
        assert data["uptime_seconds"] >= 0


class TestClassifyEndpoint:
    def test_classify_returns_label_and_probabilities(self, client, review_classifier):
        text = "fantastic and wonderful"
        response = client.post("/classify", json={"text": text})

        assert response.status_code == 200
        data = response.json()
        label, probabilities = review_classifier.predict(text)
        assert data["label"] == label == "positive"
        assert data["probabilities"] == pytest.approx(probabilities)

    def test_classify_negative(self, client):
        response = client.post("/classify", json={"text": "terrible rude service"})

        assert response.status_code == 200
        assert response.json()["label"] == "negative"

    def test_empty_text_rejected(self, client):
        response = client.post("/classify", json={"text": ""})

        assert response.status_code == 400
        assert response.json()["detail"] == "text is required"

    def test_missing_text_rejected(self, client):
        response = client.post("/classify", json={})

        assert response.status_code == 400
        assert response.json()["detail"] == "text is required"

    def test_invalid_json_rejected(self, client):
        response = client.post(
            "/classify",
            content="{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "invalid JSON body"

    def test_wrong_type_rejected(self, client):
        response = client.post("/classify", json={"text": 42})

        assert response.status_code == 400
        assert response.json()["detail"] == "invalid JSON body"

    def test_get_not_allowed(self, client):
        response = client.get("/classify")

        assert response.status_code == 405

    def test_classify_does_not_train(self, client, review_classifier):
        before = review_classifier.snapshot()
        client.post("/classify", json={"text": "brand new vocabulary"})
        assert review_classifier.snapshot() == before


class TestUntrainedModel:
    def test_untrained_model_returns_empty_prediction(self):
        with TestClient(create_app(NaiveBayesClassifier())) as client:
            response = client.post("/classify", json={"text": "hello"})

        assert response.status_code == 200
        assert response.json() == {"label": "", "probabilities": {}}
