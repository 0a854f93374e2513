from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class EntityRef:
    id: int
    url: str


def find_existing(store, name) -> Optional[EntityRef]:
    """Return the stored entity whose name matches ``name`` ignoring case, if any.

    The search covers every record, including one being updated.
    """
    existing = store.find_by_name(name)
    if existing is None:
        return None
    return EntityRef(id=existing.id, url=existing.url)
