"""HTTP-level tests for the FastAPI app in main.py."""

import os
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

import config
import main
from Services.errors import ProvisioningError

CARD = {
    "name": "Card",
    "type": "FRAME",
    "x": -50,
    "y": -10,
    "width": 300,
    "height": 120,
    "fills": [{"type": "SOLID", "color": {"r": 1, "g": 1, "b": 1}, "opacity": 1}],
    "children": [
        {
            "name": "Label",
            "type": "TEXT",
            "x": 10,
            "y": 10,
            "width": 80,
            "height": 20,
            "textContent": "Hi!",
            "fontSize": 16,
            "fontFamily": "Inter",
            "fontWeight": "Bold",
        }
    ],
}


@pytest.fixture
def client():
    with patch("main.resolve_font_css", return_value=""):
        yield TestClient(main.app)


@pytest.fixture
def project_dir(tmp_path, monkeypatch):
    target = tmp_path / "react-app"
    monkeypatch.setattr(config, "PROJECT_DIR", str(target))
    return target


class TestServiceRoutes:
    def test_root(self, client):
        assert client.get("/").status_code == 200

    def test_health(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "ok"


class TestCompile:
    def test_compile_card(self, client):
        resp = client.post("/compile", json={"data": [CARD]})
        assert resp.status_code == 200
        body = resp.json()
        assert body["name"] == "Card"
        assert "left: '60px'," in body["component"]
        assert "{'Hi!'}" in body["component"]
        assert ".card-container {" in body["stylesheet"]

    def test_empty_tree(self, client):
        resp = client.post("/compile", json={"data": []})
        assert resp.status_code == 400

    def test_missing_box_rejected(self, client):
        node = {k: v for k, v in CARD.items() if k != "width"}
        resp = client.post("/compile", json={"data": [node]})
        assert resp.status_code == 422

    def test_non_finite_numbers_degrade(self, client):
        body = '{"data": [{"name": "Card", "type": "FRAME", "width": NaN, "height": 120, "rotation": Infinity}]}'
        resp = client.post("/compile", content=body, headers={"Content-Type": "application/json"})
        assert resp.status_code == 200
        assert "width: 0px;" in resp.json()["stylesheet"]


class TestGenerate:
    def test_generate_writes_project(self, client, project_dir):
        resp = client.post("/generate-component", json={"data": [CARD]})
        assert resp.status_code == 200

        body = resp.json()
        assert body["success"] is True
        assert body["componentName"] == "Card"

        components = project_dir / config.COMPONENTS_SUBDIR
        assert body["componentPath"] == os.path.join(str(components), "Card.jsx")
        assert (components / "Card.jsx").is_file()
        assert (components / "Card.css").is_file()
        assert (project_dir / "package.json").is_file()
        app_entry = (project_dir / "src" / "App.jsx").read_text(encoding="utf-8")
        assert "import Card from './components/Card';" in app_entry

    def test_plugin_route_alias(self, client, project_dir):
        resp = client.post("/api/generate", json={"data": [CARD]})
        assert resp.status_code == 200
        assert (project_dir / config.COMPONENTS_SUBDIR / "Card.jsx").is_file()

    def test_bad_input_writes_nothing(self, client, project_dir):
        resp = client.post("/generate-component", json={"data": []})
        assert resp.status_code == 400
        assert not project_dir.exists()

    def test_provisioning_failure(self, client, project_dir):
        with patch("main.ensure_project", side_effect=ProvisioningError("npm offline")):
            resp = client.post("/generate-component", json={"data": [CARD]})
        assert resp.status_code == 503
        assert resp.json()["detail"]["error"] == "provisioning_failed"
        assert not (project_dir / config.COMPONENTS_SUBDIR / "Card.jsx").exists()

    def test_write_failure(self, client, tmp_path, monkeypatch):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")
        monkeypatch.setattr(config, "PROJECT_DIR", str(blocker))

        with patch("main.ensure_project", return_value=False):
            resp = client.post("/generate-component", json={"data": [CARD]})
        assert resp.status_code == 500
        detail = resp.json()["detail"]
        assert detail["error"] == "write_failed"
        assert detail["componentName"] == "Card"
