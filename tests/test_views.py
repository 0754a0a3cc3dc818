"""Tests for the DWG viewer HTTP API."""
import struct

import pytest
from django.urls import reverse

from .conftest import PNG_SIGNATURE


def _body(response) -> bytes:
    body = b"".join(response.streaming_content)
    response.close()
    return body


@pytest.fixture
def api_survey(viewer_settings, survey_dxf):
    return survey_dxf


class TestFileEndpoints:

    def test_list(self, client, api_survey, source_file):
        response = client.get(reverse("dwg:list"))

        assert response.status_code == 200
        assert [f["name"] for f in response.json()] == ["rilievo.dwg", "rilievo.dxf"]

    def test_list_empty(self, client, viewer_settings):
        response = client.get("/api/dwg/list/")

        assert response.status_code == 200
        assert response.json() == []

    def test_info(self, client, api_survey):
        response = client.get(reverse("dwg:info", args=["rilievo.dxf"]))

        assert response.status_code == 200
        assert response.json()["name"] == "rilievo.dxf"

    def test_info_not_found(self, client, viewer_settings):
        response = client.get(reverse("dwg:info", args=["missing.dwg"]))

        assert response.status_code == 404
        assert response.json() == {"error": "File not found"}


class TestPreviewEndpoints:

    def test_preview_is_a_1600px_png(self, client, api_survey, viewer_settings):
        response = client.get(reverse("dwg:preview", args=["rilievo.dxf"]))

        assert response.status_code == 200
        assert response["Content-Type"] == "image/png"
        body = _body(response)
        assert body.startswith(PNG_SIGNATURE)
        assert struct.unpack(">II", body[16:24]) == (1600, 1600)
        assert (viewer_settings.cache / "rilievo.dxf.png").exists()

    def test_preview_not_found(self, client, viewer_settings):
        response = client.get(reverse("dwg:preview", args=["missing.dwg"]))

        assert response.status_code == 404

    def test_preview_render_failure(self, client, viewer_settings):
        (viewer_settings.files / "notes.txt").write_text("not a drawing")

        response = client.get(reverse("dwg:preview", args=["notes.txt"]))

        assert response.status_code == 500
        assert response.json()["error"].startswith("Failed to generate preview:")
        assert not (viewer_settings.cache / "notes.txt.png").exists()

    def test_section_preview(self, client, api_survey, viewer_settings):
        response = client.get(reverse("dwg:section", args=["rilievo.dxf", "progetto"]))

        assert response.status_code == 200
        assert _body(response).startswith(PNG_SIGNATURE)
        assert (viewer_settings.cache / "rilievo.dxf_progetto.png").exists()

    def test_section_invalid_name(self, client, api_survey):
        response = client.get("/api/dwg/section/rilievo.dxf/a%5Cb/")

        assert response.status_code == 400

    def test_section_not_found(self, client, viewer_settings):
        response = client.get(reverse("dwg:section", args=["missing.dwg", "progetto"]))

        assert response.status_code == 404


class TestGeometryEndpoint:

    def test_geometry(self, client, api_survey):
        response = client.get(reverse("dwg:geometry", args=["rilievo.dxf"]))

        assert response.status_code == 200
        data = response.json()
        assert data["previewUrl"] == "/api/dwg/preview/rilievo.dxf/"
        assert data["defaultHeight"] == 3.0
        assert [f["name"] for f in data["floors"]] == ["PIANO TERZO", "SOTTOTETTO"]
        assert [len(f["walls"]) for f in data["floors"]] == [5, 2]
        assert data["floors"][1]["walls"][0]["sourceLayer"] == "SOTTOTETTO_MURI"
        assert data["sections"] == [
            {"name": "stato-di-fatto", "label": "STATO DI FATTO", "floors": ["PIANO TERZO", "SOTTOTETTO"]},
            {"name": "progetto", "label": "PROGETTO", "floors": ["PIANO TERZO", "SOTTOTETTO"]},
        ]

    def test_geometry_of_undecodable_file_degrades(self, client, viewer_settings):
        (viewer_settings.files / "notes.txt").write_text("not a drawing")

        response = client.get(reverse("dwg:geometry", args=["notes.txt"]))

        assert response.status_code == 200
        data = response.json()
        assert [f["walls"] for f in data["floors"]] == [[], []]
        assert [s["name"] for s in data["sections"]] == ["stato-di-fatto", "progetto"]

    def test_geometry_not_found(self, client, viewer_settings):
        response = client.get(reverse("dwg:geometry", args=["missing.dwg"]))

        assert response.status_code == 404


class TestStatusAndHealth:

    def test_status(self, client, viewer_settings):
        response = client.get(reverse("dwg:status"))

        assert response.status_code == 200
        assert response.json()["dxf"] is True

    def test_liveness(self, client):
        assert client.get("/livez/").json() == {"status": "alive"}

    def test_readiness(self, client, viewer_settings):
        response = client.get("/healthz/")

        assert response.status_code == 200
        assert response.json()["checks"] == {"files_dir": "ok", "cache_dir": "ok"}

    def test_readiness_without_files_dir(self, client, settings, tmp_path):
        settings.DWG_VIEWER = {
            **settings.DWG_VIEWER,
            "FILES_DIR": tmp_path / "nope",
            "CACHE_DIR": tmp_path / "cache",
        }

        response = client.get("/healthz/")

        assert response.status_code == 503
        assert response.json()["checks"]["files_dir"] == "missing"
