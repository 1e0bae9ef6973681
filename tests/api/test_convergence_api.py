"""Tests for the convergence study endpoints."""

from __future__ import annotations

import pytest
from httpx import AsyncClient

from windmc_api.config import settings

pytestmark = pytest.mark.asyncio


class TestHealth:
    async def test_health(self, client: AsyncClient):
        resp = await client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "ok"

    async def test_request_id_header(self, client: AsyncClient):
        resp = await client.get("/health", headers={"X-Request-ID": "abc123"})
        assert resp.headers["X-Request-ID"] == "abc123"


class TestDefaults:
    async def test_defaults(self, client: AsyncClient):
        resp = await client.get("/api/v1/convergence/defaults")
        assert resp.status_code == 200
        data = resp.json()
        assert [f["name"] for f in data["farms"]] == ["farm1", "farm2"]
        assert data["farms"][0]["wind"] == {"scale": 10.0, "shape": 2.0}
        assert data["power_curve"]["rated_power_kw"] == 2000.0
        assert data["checkpoint_step"] == 100
        assert data["max_checkpoint"] == 10_000
        assert data["reference_sample_size"] == 100_000
        assert data["seed"] == 42


class TestRunConvergence:
    async def test_run(self, client: AsyncClient, study_body):
        resp = await client.post("/api/v1/convergence", json=study_body)
        assert resp.status_code == 200
        data = resp.json()

        sizes = [p["sample_size"] for p in data["points"]]
        assert sizes == list(range(100, 1001, 100))
        assert data["reference"]["sample_size"] == 20_000
        assert data["reference"]["method"] == "monte_carlo"
        assert 0.0 < data["reference"]["mean"] < 4000.0

        last = data["points"][-1]
        assert last["ci_lower"] < last["mean"] < last["ci_upper"]
        assert data["summary"]["final_sample_size"] == 1000

    async def test_reproducible(self, client: AsyncClient, study_body):
        first = await client.post("/api/v1/convergence", json=study_body)
        second = await client.post("/api/v1/convergence", json=study_body)
        assert first.json() == second.json()

    async def test_quadrature(self, client: AsyncClient, study_body):
        study_body["reference_method"] = "quadrature"
        resp = await client.post("/api/v1/convergence", json=study_body)
        assert resp.status_code == 200
        ref = resp.json()["reference"]
        assert ref["method"] == "quadrature"
        assert ref["standard_error"] == 0.0

    async def test_curve_ordering_rejected(self, client: AsyncClient, study_body):
        study_body["power_curve"]["cut_in"] = 15.0
        resp = await client.post("/api/v1/convergence", json=study_body)
        assert resp.status_code == 422
        assert "cut_in" in resp.json()["detail"]

    async def test_small_reference_rejected(self, client: AsyncClient, study_body):
        study_body["reference_sample_size"] = 1000
        resp = await client.post("/api/v1/convergence", json=study_body)
        assert resp.status_code == 422
        assert "reference sample size" in resp.json()["detail"]

    async def test_negative_scale_rejected(self, client: AsyncClient, study_body):
        study_body["farms"][0]["wind"]["scale"] = -1.0
        resp = await client.post("/api/v1/convergence", json=study_body)
        assert resp.status_code == 422

    async def test_duplicate_farm_names_rejected(self, client: AsyncClient, study_body):
        study_body["farms"][1]["name"] = "farm1"
        resp = await client.post("/api/v1/convergence", json=study_body)
        assert resp.status_code == 422
        assert "unique" in resp.json()["detail"]

    async def test_scenario_budget(self, client: AsyncClient, study_body, monkeypatch):
        monkeypatch.setattr(settings, "max_total_scenarios", 1000)
        resp = await client.post("/api/v1/convergence", json=study_body)
        assert resp.status_code == 422
        assert "above the limit" in resp.json()["detail"]

    async def test_rejection_emits_no_deprecated_status(self, client: AsyncClient, study_body, recwarn):
        study_body["reference_sample_size"] = 1000
        resp = await client.post("/api/v1/convergence", json=study_body)
        assert resp.status_code == 422
        assert not [w for w in recwarn if "HTTP_422" in str(w.message)]
