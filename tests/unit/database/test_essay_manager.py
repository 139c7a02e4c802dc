"""
test_essay_manager.py
---------------------
Unit tests for EssayManager: slugs, listing and tag filters.
"""
import pytest

from attic.core.exceptions import (
    ConflictError,
    MissingReferenceError,
    NotFoundError,
    ValidationError,
)
from attic.database.managers import EssayManager
from attic.database.models import Essay, PublishStatus


def essay_data(**overrides):
    data = {"title": "On Walking", "content": "Walking is thinking with the feet."}
    data.update(overrides)
    return data


class TestEssayCreate:
    """Tests for EssayManager.create()."""

    def test_create_defaults(self, essay_manager):
        essay = essay_manager.create(essay_data())

        assert essay.slug == "on-walking"
        assert essay.status == PublishStatus.PUBLISHED
        assert essay.published_at is not None
        assert essay.tags == []

    def test_create_with_tags(self, essay_manager, tag_manager):
        tag = tag_manager.create({"name": "Walking"})

        essay = essay_manager.create(essay_data(tagIds=[tag.id, tag.id]))

        assert [t.name for t in essay.tags] == ["Walking"]

    def test_unknown_tag_rejected(self, essay_manager, db_session):
        with pytest.raises(MissingReferenceError) as exc_info:
            essay_manager.create(essay_data(tagIds=[404]))

        assert exc_info.value.kind == "TAG_NOT_FOUND"
        assert db_session.query(Essay).count() == 0

    def test_duplicate_slug_conflicts(self, essay_manager):
        essay_manager.create(essay_data())
        with pytest.raises(ConflictError) as exc_info:
            essay_manager.create(essay_data(title="On walking!"))
        assert exc_info.value.kind == "SLUG_EXISTS"

    def test_cover_image_must_be_url(self, essay_manager):
        with pytest.raises(ValidationError):
            essay_manager.create(essay_data(coverImage="not a url"))

    def test_read_time_must_be_positive(self, essay_manager):
        with pytest.raises(ValidationError):
            essay_manager.create(essay_data(readTime=0))


class TestEssayGet:
    """Tests for EssayManager.get()."""

    def test_by_slug_and_id(self, essay_manager):
        essay = essay_manager.create(essay_data())

        assert essay_manager.get("on-walking") is essay
        assert essay_manager.get(essay.id) is essay
        assert essay_manager.get(str(essay.id)) is essay

    def test_missing(self, essay_manager):
        assert essay_manager.get("nope") is None


class TestEssayList:
    """Tests for EssayManager.list() and list_by_tag()."""

    def test_filter_by_status(self, essay_manager):
        essay_manager.create(essay_data())
        essay_manager.create(essay_data(title="Drafty", status="DRAFT"))

        page = essay_manager.list({"status": "DRAFT"})

        assert [essay.title for essay in page.items] == ["Drafty"]

    def test_search_title_subtitle_excerpt(self, essay_manager):
        essay_manager.create(essay_data(title="One", excerpt="About rivers"))
        essay_manager.create(essay_data(title="Two", subtitle="Mountains"))

        assert [e.title for e in essay_manager.list({"search": "river"}).items] == ["One"]
        assert [e.title for e in essay_manager.list({"search": "MOUNT"}).items] == ["Two"]

    def test_search_ignores_content(self, essay_manager):
        essay_manager.create(essay_data(content="hidden keyword"))
        assert essay_manager.list({"search": "keyword"}).total == 0

    def test_newest_first(self, essay_manager):
        first = essay_manager.create(essay_data(title="First"))
        second = essay_manager.create(essay_data(title="Second"))

        page = essay_manager.list()

        assert [e.id for e in page.items] == [second.id, first.id]

    def test_list_by_tag_only_published(self, essay_manager, tag_manager):
        tag = tag_manager.create({"name": "Nature"})
        essay_manager.create(essay_data(title="Public", tagIds=[tag.id]))
        essay_manager.create(essay_data(title="Private", status="DRAFT", tagIds=[tag.id]))
        essay_manager.create(essay_data(title="Untagged"))

        page = essay_manager.list_by_tag({"tagSlug": "nature"})

        assert [e.title for e in page.items] == ["Public"]
        assert page.total == 1

    def test_list_by_unknown_tag_is_empty(self, essay_manager):
        page = essay_manager.list_by_tag({"tagSlug": "missing", "limit": 5})
        assert page.items == []
        assert page.total == 0
        assert page.limit == 5


class TestEssayUpdateDelete:
    """Tests for EssayManager.update() and delete()."""

    def test_retitle_changes_slug(self, essay_manager):
        essay = essay_manager.create(essay_data())

        essay_manager.update({"id": essay.id, "title": "On Running"})

        assert essay.slug == "on-running"
        assert essay_manager.get("on-walking") is None

    def test_slug_change_is_logged(self, db_session, mock_logger):
        manager = EssayManager(db_session, mock_logger)
        essay = manager.create(essay_data())

        manager.update({"id": essay.id, "title": "On Running"})

        mock_logger.log_info.assert_called_once()
        details = mock_logger.log_info.call_args[0][1]
        assert details == {"essay_id": essay.id, "old": "on-walking", "new": "on-running"}

    def test_retitle_to_taken_slug_conflicts(self, essay_manager):
        essay_manager.create(essay_data(title="Taken"))
        essay = essay_manager.create(essay_data())

        with pytest.raises(ConflictError):
            essay_manager.update({"id": essay.id, "title": "taken"})

    def test_partial_update_keeps_other_fields(self, essay_manager):
        essay = essay_manager.create(essay_data(subtitle="Sub"))

        essay_manager.update({"id": essay.id, "excerpt": "Short"})

        assert essay.subtitle == "Sub"
        assert essay.excerpt == "Short"

    def test_optional_field_can_be_cleared(self, essay_manager):
        essay = essay_manager.create(essay_data(subtitle="Sub"))

        essay_manager.update({"id": essay.id, "subtitle": None})

        assert essay.subtitle is None

    def test_required_field_cannot_be_cleared(self, essay_manager):
        essay = essay_manager.create(essay_data())
        with pytest.raises(ValidationError):
            essay_manager.update({"id": essay.id, "content": None})

    def test_replace_tags(self, essay_manager, tag_manager):
        old = tag_manager.create({"name": "Old"})
        new = tag_manager.create({"name": "New"})
        essay = essay_manager.create(essay_data(tagIds=[old.id]))

        essay_manager.update({"id": essay.id, "tagIds": [new.id]})

        assert [t.name for t in essay.tags] == ["New"]

    def test_update_missing(self, essay_manager):
        with pytest.raises(NotFoundError):
            essay_manager.update({"id": 404, "title": "Ghost"})

    def test_delete(self, essay_manager, db_session):
        essay = essay_manager.create(essay_data())

        essay_manager.delete(essay.id)

        assert db_session.query(Essay).count() == 0

    def test_delete_missing(self, essay_manager):
        with pytest.raises(NotFoundError):
            essay_manager.delete(404)
