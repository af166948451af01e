"""Tests for export API endpoints, with the render engine replaced."""

from __future__ import annotations

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from resume_builder.api.dependencies import get_pdf_renderer
from resume_builder.api.main import app
from resume_builder.export.docx_writer import DOCX_MEDIA_TYPE

BASE = "/api/v1/resumes"
HEADERS = {"X-Username": "alice"}


@pytest.fixture
def client(api_db: None, fake_renderer) -> Generator[TestClient]:
    """Test client whose PDF renderer is the recording fake."""
    app.dependency_overrides[get_pdf_renderer] = lambda: fake_renderer
    yield TestClient(app)
    app.dependency_overrides.pop(get_pdf_renderer, None)


def _create(client: TestClient, full_name: str = "Jane Doe") -> str:
    response = client.post(
        BASE,
        json={"title": "Data Engineer", "content": {"personal": {"full_name": full_name}}},
        headers=HEADERS,
    )
    return response.json()["id"]


def test_pdf_export(client: TestClient, fake_renderer) -> None:
    resume_id = _create(client)

    response = client.get(f"{BASE}/{resume_id}/export/pdf", headers=HEADERS)

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert response.headers["content-disposition"] == (
        'attachment; filename="Jane_Doe_Data_Engineer.pdf"'
    )
    assert response.content.startswith(b"%PDF")
    assert len(fake_renderer.calls) == 1


def test_docx_export(client: TestClient) -> None:
    resume_id = _create(client)

    response = client.get(f"{BASE}/{resume_id}/export/docx", headers=HEADERS)

    assert response.status_code == 200
    assert response.headers["content-type"] == DOCX_MEDIA_TYPE
    assert response.content.startswith(b"PK")
    assert "Jane_Doe_Data_Engineer.docx" in response.headers["content-disposition"]


def test_non_ascii_filename(client: TestClient) -> None:
    resume_id = _create(client, full_name="Zoë Ångström")

    response = client.get(f"{BASE}/{resume_id}/export/docx", headers=HEADERS)

    disposition = response.headers["content-disposition"]
    assert "filename*=UTF-8''Zo%C3%AB_%C3%85ngstr%C3%B6m_Data_Engineer.docx" in disposition


def test_pdf_from_html(client: TestClient, fake_renderer) -> None:
    resume_id = _create(client)

    response = client.post(
        f"{BASE}/{resume_id}/export/pdf-html",
        json={"html": "<div>preview</div>", "css": "div{}"},
        headers=HEADERS,
    )

    assert response.status_code == 200
    assert fake_renderer.calls == [("<div>preview</div>", "div{}")]


def test_pdf_from_html_requires_markup(client: TestClient) -> None:
    resume_id = _create(client)

    response = client.post(
        f"{BASE}/{resume_id}/export/pdf-html", json={"html": "<div/>"}, headers=HEADERS
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "HTML and CSS content are required"


def test_export_of_missing_resume(client: TestClient) -> None:
    response = client.get(f"{BASE}/missing/export/docx", headers=HEADERS)

    assert response.status_code == 404


def test_shared_exports(client: TestClient) -> None:
    resume_id = _create(client)
    share_id = client.post(
        f"{BASE}/{resume_id}/share", json={"consent": True, "password": "pw"}, headers=HEADERS
    ).json()["share_id"]

    assert client.get(f"{BASE}/share/{share_id}/export/docx").status_code == 401
    docx = client.get(f"{BASE}/share/{share_id}/export/docx", params={"password": "pw"})
    pdf = client.get(f"{BASE}/share/{share_id}/export/pdf", params={"password": "pw"})

    assert docx.status_code == 200
    assert pdf.status_code == 200


def test_shared_export_forbidden(client: TestClient) -> None:
    resume_id = _create(client)
    share_id = client.post(
        f"{BASE}/{resume_id}/share",
        json={"consent": True, "allow_download": False},
        headers=HEADERS,
    ).json()["share_id"]

    response = client.get(f"{BASE}/share/{share_id}/export/pdf")

    assert response.status_code == 403
    assert client.get(f"{BASE}/share/{share_id}").status_code == 200


def test_quoted_title_keeps_header_well_formed(client: TestClient) -> None:
    response = client.post(
        BASE,
        json={"title": 'The "Best" CV', "content": {"personal": {"full_name": "Jane Doe"}}},
        headers=HEADERS,
    )

    exported = client.get(f"{BASE}/{response.json()['id']}/export/pdf", headers=HEADERS)

    assert exported.headers["content-disposition"] == (
        'attachment; filename="Jane_Doe_The_Best_CV.pdf"'
    )
