"""Create/update handling for named entities submitted through a form.

Each submission moves through Received -> Sanitized -> ConflictChecked and
ends in one of three states:

* ``REJECTED``: the name failed validation. Nothing was read from or written
  to the store. The result carries the unsaved entity and the field errors so
  the form can be shown again.
* ``REDIRECTED``: an entity with the same name (ignoring case) already exists.
  The submission is dropped and the caller is sent to that entity.
* ``PERSISTED``: the entity was inserted (create) or renamed (update).

The duplicate check and the write are separate store calls with no lock
between them. Two submissions of the same new name can both pass the check
and both be written.
"""
import enum
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .conflicts import find_existing
from .sanitize import FieldError, GENRE_NAME_RULES, sanitize

logger = logging.getLogger(__name__)


class WorkflowState(enum.Enum):
    REJECTED = "rejected"
    REDIRECTED = "redirected"
    PERSISTED = "persisted"


@dataclass
class WorkflowResult:
    state: WorkflowState
    entity: object
    errors: List[FieldError] = field(default_factory=list)
    redirect_url: Optional[str] = None


class FormWorkflow:

    def __init__(self, store, rules, field="name", resolver=find_existing):
        self.store = store
        self.rules = rules
        self.field = field
        self.resolver = resolver

    def _transient(self, value, entity_id=None):
        entity = self.store.model(**{self.field: value})
        if entity_id is not None:
            entity.id = entity_id
        return entity

    def create(self, raw_value) -> WorkflowResult:
        sanitized = sanitize(raw_value, self.rules, self.field)
        entity = self._transient(sanitized.value)
        if not sanitized.is_valid:
            logger.debug("create rejected: %s", [e.message for e in sanitized.errors])
            return WorkflowResult(WorkflowState.REJECTED, entity, sanitized.errors)

        existing = self.resolver(self.store, sanitized.value)
        if existing is not None:
            logger.debug("create of %r redirected to existing %s", sanitized.value, existing.url)
            return WorkflowResult(WorkflowState.REDIRECTED, entity, redirect_url=existing.url)

        self.store.insert(entity)
        logger.info("created %s %s (%r)", self.store.model.__name__, entity.id, sanitized.value)
        return WorkflowResult(WorkflowState.PERSISTED, entity, redirect_url=entity.url)

    def update(self, entity_id, raw_value) -> WorkflowResult:
        sanitized = sanitize(raw_value, self.rules, self.field)
        entity = self._transient(sanitized.value, entity_id)
        if not sanitized.is_valid:
            logger.debug("update of %s rejected: %s", entity_id, [e.message for e in sanitized.errors])
            return WorkflowResult(WorkflowState.REJECTED, entity, sanitized.errors)

        # Not scoped to other ids: resubmitting the current name also redirects
        existing = self.resolver(self.store, sanitized.value)
        if existing is not None:
            logger.debug("update of %s redirected to existing %s", entity_id, existing.url)
            return WorkflowResult(WorkflowState.REDIRECTED, entity, redirect_url=existing.url)

        self.store.update_by_id(entity_id, {self.field: sanitized.value})
        logger.info("updated %s %s (%r)", self.store.model.__name__, entity_id, sanitized.value)
        return WorkflowResult(WorkflowState.PERSISTED, entity, redirect_url=entity.url)


def genre_workflow(store) -> FormWorkflow:
    return FormWorkflow(store, GENRE_NAME_RULES)
