"""Tests for version history API endpoints."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from resume_builder.api.main import app

BASE = "/api/v1/resumes"
HEADERS = {"X-Username": "alice"}


@pytest.fixture
def client(api_db: None) -> TestClient:
    """Create a test client for the API."""
    return TestClient(app)


@pytest.fixture
def resume_id(client: TestClient) -> str:
    response = client.post(
        BASE, json={"content": {"personal": {"full_name": "First"}}}, headers=HEADERS
    )
    return response.json()["id"]


def test_save_and_list(client: TestClient, resume_id: str) -> None:
    saved = client.post(f"{BASE}/{resume_id}/version", json={"comment": "draft"}, headers=HEADERS)
    client.post(f"{BASE}/{resume_id}/version", headers=HEADERS)

    assert saved.status_code == 200
    assert saved.json() == {
        "current_version": 2,
        "saved_version": 1,
        "comment": "draft",
        "total_versions": 1,
    }
    history = client.get(f"{BASE}/{resume_id}/versions", headers=HEADERS).json()
    assert history["current_version"] == 3
    assert [v["comment"] for v in history["versions"]] == ["draft", "Version 2"]


def test_restore_and_compare(client: TestClient, resume_id: str) -> None:
    client.post(f"{BASE}/{resume_id}/version", headers=HEADERS)
    client.put(
        f"{BASE}/{resume_id}",
        json={"content": {"personal": {"full_name": "Second"}}},
        headers=HEADERS,
    )

    restored = client.post(f"{BASE}/{resume_id}/restore/1", headers=HEADERS)

    assert restored.status_code == 200
    body = restored.json()
    assert body["current_version"] == 3
    assert body["restored_version"] == 1
    assert body["content"]["personal"]["full_name"] == "First"

    compared = client.get(f"{BASE}/{resume_id}/compare/2/current", headers=HEADERS)
    assert compared.status_code == 200
    assert compared.json()["version1"]["content"]["personal"]["full_name"] == "Second"
    assert compared.json()["version2"]["content"]["personal"]["full_name"] == "First"


@pytest.mark.parametrize("version", ["9", "latest"])
def test_unknown_version_is_404(client: TestClient, resume_id: str, version: str) -> None:
    response = client.post(f"{BASE}/{resume_id}/restore/{version}", headers=HEADERS)

    assert response.status_code == 404
    assert response.json()["detail"] == "Version not found"


def test_other_user_cannot_see_history(client: TestClient, resume_id: str) -> None:
    response = client.get(f"{BASE}/{resume_id}/versions", headers={"X-Username": "bob"})

    assert response.status_code == 404
