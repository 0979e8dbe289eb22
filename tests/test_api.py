"""Tests for colorflow FastAPI endpoints."""

import io

from fastapi.testclient import TestClient
from PIL import Image

from colorflow.main import app

client = TestClient(app)


class TestHealthEndpoint:
    def test_health_returns_200(self):
        resp = client.get("/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "healthy"
        assert data["service"] == "colorflow"

    def test_health_includes_version(self):
        resp = client.get("/health")
        data = resp.json()
        assert "version" in data


class TestGenerateEndpoint:
    def test_generate_returns_png(self):
        resp = client.post("/generate", json={"scale": 2, "num_seeds": 1})
        assert resp.status_code == 200
        assert resp.headers["content-type"] == "image/png"
        assert resp.content[:4] == b"\x89PNG"
        image = Image.open(io.BytesIO(resp.content))
        assert image.size == (8, 8)

    def test_generate_filename_header(self):
        resp = client.post("/generate", json={"scale": 2, "num_seeds": 1, "seed": 3})
        assert "img-2-0.15-1-3.png" in resp.headers["content-disposition"]

    def test_generate_deterministic(self):
        body = {"scale": 2, "num_seeds": 2, "seed": 8}
        assert client.post("/generate", json=body).content == client.post(
            "/generate", json=body
        ).content

    def test_generate_unspaced(self):
        resp = client.post(
            "/generate", json={"scale": 2, "num_seeds": 2, "seed_spacing": False}
        )
        assert resp.status_code == 200

    def test_scale_too_small_returns_422(self):
        resp = client.post("/generate", json={"scale": 1, "num_seeds": 1})
        assert resp.status_code == 422

    def test_scale_too_large_returns_422(self):
        resp = client.post("/generate", json={"scale": 5, "num_seeds": 1})
        assert resp.status_code == 422

    def test_zero_seeds_returns_422(self):
        resp = client.post("/generate", json={"scale": 2, "num_seeds": 0})
        assert resp.status_code == 422

    def test_too_many_seeds_returns_422(self):
        resp = client.post("/generate", json={"scale": 2, "num_seeds": 65})
        assert resp.status_code == 422
        assert "num_seeds" in resp.json()["detail"]

    def test_missing_scale_returns_422(self):
        resp = client.post("/generate", json={"num_seeds": 1})
        assert resp.status_code == 422

    def test_non_finite_spread_returns_422(self):
        for literal in ("NaN", "Infinity", "-Infinity"):
            resp = client.post(
                "/generate",
                content=f'{{"scale": 2, "num_seeds": 1, "spread": {literal}}}',
                headers={"content-type": "application/json"},
            )
            assert resp.status_code == 422
