"""Tests for the CV Studio API."""

from __future__ import annotations

import io
from collections.abc import Iterator

import pytest
from docx import Document
from fastapi.testclient import TestClient

from cv_studio.api.dependencies import get_settings
from cv_studio.api.main import app
from cv_studio.config import ExportSettings
from cv_studio.export.preview import PreviewSurface
from cv_studio.models.content import CVData
from cv_studio.models.sections import REFERENCES_ON_REQUEST
from cv_studio.templates.health import sample_content

JANE = {"personal": {"fullName": "Jane Doe", "email": "jane@x.com"}, "sections": []}


@pytest.fixture
def client(settings: ExportSettings) -> Iterator[TestClient]:
    """Create a test client whose exports and previews stay in a temp directory."""
    app.dependency_overrides[get_settings] = lambda: settings
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def sample_payload() -> dict:
    return sample_content().model_dump(mode="json", by_alias=True)


class TestHealthEndpoint:
    """Tests for the health check endpoints."""

    def test_health_returns_healthy_status(self, client: TestClient) -> None:
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    def test_template_health(self, client: TestClient) -> None:
        response = client.get("/health/templates")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["failed"] == 0
        assert {r["template_id"] for r in data["results"]} >= {"classic", "dublin-tech"}


class TestAppConfiguration:
    """Tests for the FastAPI app configuration."""

    def test_app_title(self) -> None:
        assert app.title == "CV Studio API"

    def test_app_version(self) -> None:
        assert app.version == "0.1.0"

    def test_cors_middleware_is_configured(self) -> None:
        middleware_classes = [m.cls.__name__ for m in app.user_middleware]
        assert "CORSMiddleware" in middleware_classes

    def test_unknown_route_returns_404(self, client: TestClient) -> None:
        assert client.get("/nonexistent").status_code == 404


class TestTemplateEndpoints:
    """Tests for browsing and previewing templates."""

    def test_list_templates(self, client: TestClient) -> None:
        response = client.get("/api/templates")
        assert response.status_code == 200
        ids = [t["id"] for t in response.json()]
        assert ids == ["dublin-tech", "irish-finance", "classic", "modern", "harvard"]

    def test_filter_by_category(self, client: TestClient) -> None:
        response = client.get("/api/templates", params={"category": "dublin"})
        assert [t["id"] for t in response.json()] == ["dublin-tech", "irish-finance"]

    def test_unknown_category_is_empty(self, client: TestClient) -> None:
        assert client.get("/api/templates", params={"category": "nope"}).json() == []

    def test_categories(self, client: TestClient) -> None:
        data = client.get("/api/templates/categories").json()
        assert {"category": "dublin", "count": 2} in data
        counts = [c["count"] for c in data]
        assert counts == sorted(counts, reverse=True)

    def test_template_detail(self, client: TestClient) -> None:
        response = client.get("/api/templates/dublin-tech")
        assert response.status_code == 200
        data = response.json()
        assert data["layout"] == "two-column"
        assert ".cv-container.dublin-tech" in data["css"]

    def test_template_not_found(self, client: TestClient) -> None:
        response = client.get("/api/templates/ghost")
        assert response.status_code == 404
        assert response.json()["detail"] == "Template 'ghost' not found"

    def test_validate(self, client: TestClient) -> None:
        response = client.post(
            "/api/templates/validate", json={"templateId": "classic", "cvData": JANE}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["warnings"] == ["Classic CVs require at least 3 skills"]
        assert data["by_section"] == {"skills": ["Classic CVs require at least 3 skills"]}

    def test_validate_unknown_template(self, client: TestClient) -> None:
        response = client.post(
            "/api/templates/validate", json={"templateId": "ghost", "cvData": JANE}
        )
        assert response.status_code == 404

    def test_preview_publishes_surface(
        self, client: TestClient, settings: ExportSettings
    ) -> None:
        response = client.post("/api/templates/modern/preview", json=JANE)
        assert response.status_code == 200
        data = response.json()
        assert data["published"] is True
        assert "Jane Doe" in data["html"]
        surface = PreviewSurface(settings.preview_dir)
        assert surface.locate(CVData.model_validate(JANE), "modern") is not None
        assert surface.locate(CVData.model_validate(JANE), "classic") is None

    def test_preview_unknown_template(self, client: TestClient) -> None:
        assert client.post("/api/templates/ghost/preview", json=JANE).status_code == 404


class TestDocxEndpoint:
    """Tests for the document-construction endpoint."""

    def test_returns_word_document(self, client: TestClient, sample_payload: dict) -> None:
        response = client.post(
            "/api/export/docx", json={"cvData": sample_payload, "templateId": "modern"}
        )
        assert response.status_code == 200
        assert response.headers["content-type"].startswith(
            "application/vnd.openxmlformats-officedocument"
        )
        assert 'filename="John_Doe_CV.docx"' in response.headers["content-disposition"]
        paragraphs = [p.text for p in Document(io.BytesIO(response.content)).paragraphs]
        assert paragraphs[0] == "John Doe"
        assert paragraphs[-1] == REFERENCES_ON_REQUEST

    def test_missing_cv_data(self, client: TestClient) -> None:
        response = client.post("/api/export/docx", json={"templateId": "modern"})
        assert response.status_code == 400
        assert response.json()["detail"] == "No CV data available"

    def test_missing_email(self, client: TestClient) -> None:
        response = client.post(
            "/api/export/docx", json={"cvData": {"personal": {"fullName": "Jane"}}}
        )
        assert response.status_code == 400
        assert "Email is required" in response.json()["detail"]


class TestExportJobEndpoint:
    """Tests for multi-format export jobs."""

    def test_plain_text_export(self, client: TestClient, settings: ExportSettings) -> None:
        response = client.post("/api/export", json={"cvData": JANE, "formats": ["txt"]})
        assert response.status_code == 200
        data = response.json()
        assert data["outcome"] == "success"
        assert data["message"] == "1 file(s) exported successfully."
        assert data["formats"] == [
            {"format": "txt", "progress": 100, "status": "complete", "error": None}
        ]
        saved = settings.output_dir / "Jane_Doe_CV.txt"
        assert data["files"] == {"txt": str(saved)}
        assert saved.read_text(encoding="utf-8").startswith("Jane Doe\njane@x.com\n")

    def test_duplicate_formats_collapse(self, client: TestClient) -> None:
        response = client.post(
            "/api/export", json={"cvData": JANE, "formats": ["txt", "TXT", "text"]}
        )
        assert len(response.json()["formats"]) == 1

    def test_unknown_format(self, client: TestClient) -> None:
        response = client.post("/api/export", json={"cvData": JANE, "formats": ["rtf"]})
        assert response.status_code == 400
        assert "Unknown export format" in response.json()["detail"]

    def test_no_formats(self, client: TestClient) -> None:
        response = client.post("/api/export", json={"cvData": JANE, "formats": []})
        assert response.status_code == 400

    def test_missing_cv(self, client: TestClient) -> None:
        response = client.post("/api/export", json={"formats": ["txt"]})
        assert response.status_code == 400
