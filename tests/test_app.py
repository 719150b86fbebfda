import pytest
from fastapi.testclient import TestClient

from holder import app as service
from holder.app import app
from holder.utils.geo import GeometryError


@pytest.fixture
def client():
    return TestClient(app)


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    body = r.json()
    assert body["ok"] is True
    assert body["variants"] == ["compact", "full"]


def test_variant_constants(client):
    r = client.get("/variants/4-port")
    assert r.status_code == 200
    assert r.json()["ec_width"] == 18.65
    assert r.json()["jack"]["trs_length"] == 14.3


def test_unknown_variant(client):
    assert client.get("/variants/nope").status_code == 404
    assert client.post("/generate", json={"variant": "nope"}).status_code == 404


def test_generate_stl(client):
    r = client.post("/generate", json={"variant": "compact", "resolution": 24})
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("model/stl")
    assert "holder-compact.stl" in r.headers["content-disposition"]
    assert len(r.content) > 84


def test_generate_with_overrides(client):
    r = client.post("/generate", json={
        "variant": "compact", "resolution": 16, "overrides": {"ec_width": 20.0}})
    assert r.status_code == 200


@pytest.mark.parametrize("overrides", [
    {"ec_width": -1},
    {"shrinkage_ratio": 0},
    {"resolution": 0},
    {"push_hole_position": 1.5},
    {"jack": {"trs_widht": 6.0}},
])
def test_generate_rejects_invalid_overrides(client, overrides):
    r = client.post("/generate", json={"variant": "compact", "overrides": overrides})
    assert r.status_code == 400
    assert "Invalid overrides" in r.json()["detail"]


def test_generate_reports_build_error(client, monkeypatch):
    def broken(cfg):
        raise GeometryError("size must be positive")

    monkeypatch.setattr(service, "build", broken)
    r = client.post("/generate", json={"variant": "full", "resolution": 16})
    assert r.status_code == 400
    assert "Model build error" in r.json()["detail"]


def test_generate_rejects_unknown_constant(client):
    r = client.post("/generate", json={"variant": "full", "overrides": {"bogus": 1}})
    assert r.status_code == 400


def test_generate_rejects_tiny_resolution(client):
    r = client.post("/generate", json={"variant": "full", "resolution": 2})
    assert r.status_code == 422
