"""
test_workflow.py - genre create/update workflow

Covers the three outcomes of each path: rejected, redirected to an existing
genre, and persisted.
"""
import pytest

from library_catalog.errors import NotFoundError, StoreError
from library_catalog.models import Genre
from library_catalog.workflow import FormWorkflow, WorkflowState, genre_workflow
from library_catalog.sanitize import GENRE_NAME_RULES

GENRE_ERROR = "Genre name must contain at least 3 characters"


class UntouchableStore:
    """Store that fails the test if the workflow reads or writes it."""

    model = Genre

    def __getattr__(self, name):
        pytest.fail(f"store.{name} called for an invalid submission")


# =============================================================================
# Create
# =============================================================================

class TestCreate:

    @pytest.mark.parametrize("raw", ["", "ab", "  a  ", None])
    def test_invalid_name_never_touches_store(self, raw):
        result = genre_workflow(UntouchableStore()).create(raw)

        assert result.state is WorkflowState.REJECTED
        assert [e.message for e in result.errors] == [GENRE_ERROR]
        assert result.redirect_url is None

    def test_rejected_result_carries_unsaved_entity(self, workflow, store):
        result = workflow.create(" ab ")

        assert result.entity.name == "ab"
        assert result.entity.id is None
        assert store.count() == 0

    def test_new_name_inserted_and_redirected(self, workflow, store):
        result = workflow.create(" fantasy ")

        assert result.state is WorkflowState.PERSISTED
        assert store.count() == 1
        created = store.find_by_name("fantasy")
        assert created.name == "fantasy"
        assert result.redirect_url == f"/catalog/genre/{created.id}"

    def test_case_insensitive_duplicate_redirects_to_existing(self, workflow, store, fantasy):
        result = workflow.create("Fantasy")

        assert result.state is WorkflowState.REDIRECTED
        assert result.redirect_url == f"/catalog/genre/{fantasy.id}"
        assert store.count() == 1

    def test_markup_is_escaped_before_storage(self, workflow, store):
        result = workflow.create("Sci-Fi <script>")

        assert result.state is WorkflowState.PERSISTED
        assert store.list_all()[0].name == "Sci-Fi &lt;script&gt;"

    def test_comment_markup_never_stored_empty(self, workflow, store):
        result = workflow.create("<!-- x -->")

        assert result.state is WorkflowState.PERSISTED
        assert store.list_all()[0].name == "&lt;!-- x --&gt;"

    def test_entity_text_and_character_are_distinct_genres(self, workflow, store):
        workflow.create("Tom & Jerry")

        result = workflow.create("Tom &amp; Jerry")

        assert result.state is WorkflowState.PERSISTED
        assert store.count() == 2

    def test_longest_escaped_name_persisted_intact(self, workflow, store):
        result = workflow.create("&" * 100)

        assert result.state is WorkflowState.PERSISTED
        assert store.find_by_id(result.entity.id).name == "&amp;" * 100

    def test_interleaved_creates_can_both_insert(self, store):
        """Check and write are not atomic: a check that ran before the other
        request wrote sees no match, so the name ends up stored twice."""
        stale_resolver = lambda store, name: None
        first = FormWorkflow(store, GENRE_NAME_RULES, resolver=stale_resolver)
        second = FormWorkflow(store, GENRE_NAME_RULES, resolver=stale_resolver)

        first.create("Poetry")
        second.create("poetry")

        assert store.count() == 2

    def test_store_failure_propagates(self, store, monkeypatch):
        def fail(entity):
            raise StoreError("Database error: could not insert")

        monkeypatch.setattr(store, "insert", fail)

        with pytest.raises(StoreError):
            genre_workflow(store).create("Horror")


# =============================================================================
# Update
# =============================================================================

class TestUpdate:

    def test_invalid_name_keeps_target_id(self, store, fantasy):
        result = genre_workflow(store).update(fantasy.id, "ab")

        assert result.state is WorkflowState.REJECTED
        assert result.entity.id == fantasy.id
        assert store.find_by_id(fantasy.id).name == "fantasy"

    def test_invalid_name_never_touches_store(self):
        result = genre_workflow(UntouchableStore()).update(7, "")

        assert result.state is WorkflowState.REJECTED

    def test_new_name_updates_in_place(self, workflow, store, fantasy):
        original_id, original_url = fantasy.id, fantasy.url

        result = workflow.update(fantasy.id, "  Epic Fantasy ")

        assert result.state is WorkflowState.PERSISTED
        assert result.redirect_url == original_url
        updated = store.find_by_id(original_id)
        assert updated.name == "Epic Fantasy"
        assert updated.url == original_url
        assert store.count() == 1

    def test_name_of_other_genre_redirects_without_change(self, workflow, store, fantasy):
        poetry = Genre(name="Poetry")
        store.insert(poetry)

        result = workflow.update(poetry.id, "FANTASY")

        assert result.state is WorkflowState.REDIRECTED
        assert result.redirect_url == fantasy.url
        assert store.find_by_id(poetry.id).name == "Poetry"

    def test_resubmitting_own_name_redirects(self, workflow, store, fantasy):
        result = workflow.update(fantasy.id, "Fantasy")

        assert result.state is WorkflowState.REDIRECTED
        assert result.redirect_url == fantasy.url
        assert store.find_by_id(fantasy.id).name == "fantasy"

    def test_missing_target_raises_not_found(self, workflow):
        with pytest.raises(NotFoundError):
            workflow.update(999, "Horror")
