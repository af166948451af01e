"""Test suite for résumé document service functions."""

from __future__ import annotations

import uuid

import pytest

from resume_builder.cache import get_cache
from resume_builder.data.db import get_session
from resume_builder.data.models import ResumeDocument
from resume_builder.errors import NotFound, ValidationFailed, VersionConflict
from resume_builder.services.resume import (
    DEFAULT_TITLE,
    create_resume,
    delete_resume,
    duplicate_resume,
    get_resume,
    get_resume_stats,
    list_resumes,
    move_resume_entry,
    reorder_resume_section,
    update_resume,
)
from resume_builder.services.templates import list_stored_templates, seed_builtin_templates

pytestmark = pytest.mark.usefixtures("api_db")

OWNER = "alice"


def _stored(resume_id: str) -> ResumeDocument:
    with get_session() as session:
        return session.get(ResumeDocument, resume_id)


class TestCreateResume:
    def test_defaults(self) -> None:
        result = create_resume(OWNER)

        assert result["title"] == DEFAULT_TITLE
        assert result["version"] == 1
        assert result["total_versions"] == 0
        assert result["is_public"] is False
        assert result["share_id"] is None
        assert result["template"] is None
        assert result["content"]["personal"]["full_name"] == ""

    def test_personal_data_is_encrypted_at_rest(self) -> None:
        result = create_resume(OWNER, content={"personal": {"full_name": "Jane Doe"}})

        stored = _stored(result["id"])
        assert "ciphertext" in stored.content["personal"]
        assert "Jane" not in str(stored.content)
        assert result["content"]["personal"]["full_name"] == "Jane Doe"

    def test_camel_case_content_is_kept(self) -> None:
        created = create_resume(
            OWNER,
            content={"personal": {"fullName": "Jane Doe"}, "experience": [{"jobTitle": "Dev"}]},
        )

        result = get_resume(OWNER, created["id"])
        assert result["content"]["personal"]["full_name"] == "Jane Doe"
        assert result["content"]["experience"][0]["job_title"] == "Dev"

    def test_customization_is_normalized(self) -> None:
        result = create_resume(OWNER, customization={"fontSize": "large", "spacing": "compact"})

        assert result["customization"] == {"font_size": 16, "spacing": 15}

    def test_with_template(self) -> None:
        seed_builtin_templates()
        template = next(t for t in list_stored_templates() if t["name"] == "Sidebar")

        result = create_resume(OWNER, template_id=template["id"])

        assert result["template_id"] == template["id"]
        assert result["template"]["name"] == "Sidebar"

    def test_unknown_template_is_not_found(self) -> None:
        with pytest.raises(NotFound, match="Template not found"):
            create_resume(OWNER, template_id=str(uuid.uuid4()))

    def test_malformed_template_is_invalid(self) -> None:
        with pytest.raises(ValidationFailed, match="Invalid template ID"):
            create_resume(OWNER, template_id="not-a-uuid")

    def test_invalid_customization(self) -> None:
        with pytest.raises(ValidationFailed):
            create_resume(OWNER, customization={"font_size": 40})


class TestGetResume:
    def test_other_owner_cannot_read(self) -> None:
        resume_id = create_resume(OWNER)["id"]

        with pytest.raises(NotFound):
            get_resume("mallory", resume_id)

    def test_unknown_id(self) -> None:
        with pytest.raises(NotFound):
            get_resume(OWNER, str(uuid.uuid4()))

    def test_cached_copy_stays_encrypted(self) -> None:
        resume_id = create_resume(OWNER, content={"personal": {"full_name": "Jane Doe"}})["id"]

        get_resume(OWNER, resume_id)

        cached = get_cache().get(f"resume:{resume_id}:user:{OWNER}")
        assert cached is not None
        assert "Jane" not in str(cached)


class TestUpdateResume:
    def test_empty_update_rejected(self) -> None:
        resume_id = create_resume(OWNER)["id"]

        with pytest.raises(ValidationFailed, match="No fields to update"):
            update_resume(OWNER, resume_id, {})

    def test_partial_update(self) -> None:
        resume_id = create_resume(OWNER, title="Draft")["id"]

        result = update_resume(OWNER, resume_id, {"title": "Final"})

        assert result["title"] == "Final"
        assert result["version"] == 1

    def test_update_invalidates_cache(self) -> None:
        resume_id = create_resume(OWNER, title="Draft")["id"]
        get_resume(OWNER, resume_id)

        update_resume(OWNER, resume_id, {"content": {"personal": {"full_name": "New Name"}}})

        assert get_resume(OWNER, resume_id)["content"]["personal"]["full_name"] == "New Name"

    def test_clear_template(self) -> None:
        seed_builtin_templates()
        template_id = list_stored_templates()[0]["id"]
        resume_id = create_resume(OWNER, template_id=template_id)["id"]

        result = update_resume(OWNER, resume_id, {"template_id": None})

        assert result["template_id"] is None

    def test_stale_write_raises_conflict(self) -> None:
        resume_id = create_resume(OWNER)["id"]

        with pytest.raises(VersionConflict), get_session() as session:
            doc = session.get(ResumeDocument, resume_id)
            doc.title = "Mine"
            session.flush()
            # Another writer bumps the version behind this session's back.
            session.connection().exec_driver_sql(
                "UPDATE resume_documents SET version = version + 1 WHERE id = ?", (resume_id,)
            )
            doc.title = "Mine again"

        assert _stored(resume_id).title == DEFAULT_TITLE


class TestDeleteResume:
    def test_soft_delete(self) -> None:
        resume_id = create_resume(OWNER)["id"]

        delete_resume(OWNER, resume_id)

        assert _stored(resume_id).deleted_at is not None
        with pytest.raises(NotFound):
            get_resume(OWNER, resume_id)

    def test_second_delete_is_not_found(self) -> None:
        resume_id = create_resume(OWNER)["id"]
        delete_resume(OWNER, resume_id)

        with pytest.raises(NotFound):
            delete_resume(OWNER, resume_id)


class TestListResumes:
    def test_pagination_and_search(self) -> None:
        for title in ("Backend CV", "Frontend CV", "Cover notes"):
            create_resume(OWNER, title=title)
        create_resume("bob", title="Backend CV")

        page = list_resumes(OWNER, page=1, limit=2, sort="title", order="asc")
        assert [item["title"] for item in page["data"]] == ["Backend CV", "Cover notes"]
        assert page["pagination"] == {"total": 3, "page": 1, "limit": 2, "total_pages": 2}

        found = list_resumes(OWNER, search="cv")
        assert sorted(item["title"] for item in found["data"]) == ["Backend CV", "Frontend CV"]

    def test_excludes_deleted_and_sees_new_documents(self) -> None:
        create_resume(OWNER, title="Keep")
        drop = create_resume(OWNER, title="Drop")["id"]
        list_resumes(OWNER)

        delete_resume(OWNER, drop)
        create_resume(OWNER, title="Later")

        titles = {item["title"] for item in list_resumes(OWNER)["data"]}
        assert titles == {"Keep", "Later"}

    def test_list_items_have_no_content(self) -> None:
        create_resume(OWNER, content={"personal": {"full_name": "Jane"}})

        item = list_resumes(OWNER)["data"][0]
        assert "content" not in item

    def test_bad_sort(self) -> None:
        with pytest.raises(ValidationFailed):
            list_resumes(OWNER, sort="owner_id")


class TestDuplicateAndStats:
    def test_duplicate(self) -> None:
        original = create_resume(
            OWNER, title="Main", content={"personal": {"full_name": "Jane"}}
        )

        copy = duplicate_resume(OWNER, original["id"])

        assert copy["id"] != original["id"]
        assert copy["title"] == "Main (Copy)"
        assert copy["version"] == 1
        assert copy["share_id"] is None
        assert copy["content"] == original["content"]

    def test_stats(self) -> None:
        create_resume(OWNER)
        deleted = create_resume(OWNER)["id"]
        delete_resume(OWNER, deleted)

        assert get_resume_stats(OWNER) == {"total": 1, "recent_updates": 1, "downloads": 0}


class TestReordering:
    def _resume(self) -> str:
        return create_resume(
            OWNER,
            content={
                "personal": {"full_name": "Jane"},
                "experience": [{"id": "exp-1"}, {"id": "exp-2"}, {"id": "exp-3"}],
            },
        )["id"]

    def test_reorder_section_persists(self) -> None:
        resume_id = self._resume()

        result = reorder_resume_section(OWNER, resume_id, "experience", ["exp-3", "exp-1", "exp-2"])

        assert [e["id"] for e in result["content"]["experience"]] == ["exp-3", "exp-1", "exp-2"]
        assert result["content"]["personal"]["full_name"] == "Jane"
        persisted = get_resume(OWNER, resume_id)["content"]["experience"]
        assert [e["id"] for e in persisted] == ["exp-3", "exp-1", "exp-2"]

    def test_move_entry_persists(self) -> None:
        resume_id = self._resume()

        result = move_resume_entry(OWNER, resume_id, "experience", 2, 0)

        assert [e["id"] for e in result["content"]["experience"]] == ["exp-3", "exp-1", "exp-2"]

    def test_non_permutation_rejected_and_nothing_changes(self) -> None:
        resume_id = self._resume()

        with pytest.raises(ValidationFailed):
            reorder_resume_section(OWNER, resume_id, "experience", ["exp-1"])

        persisted = get_resume(OWNER, resume_id)["content"]["experience"]
        assert [e["id"] for e in persisted] == ["exp-1", "exp-2", "exp-3"]
