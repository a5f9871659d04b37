"""Exception types for Coach Clipboard."""


class CoachClipboardError(Exception):
    """Base class for Coach Clipboard errors."""


class StoreError(CoachClipboardError):
    """A write the entity store cannot apply."""


class EntityNotFoundError(StoreError):
    """An update referenced an entity id that is not in the store."""

    def __init__(self, kind: str, entity_id: str):
        super().__init__(f"{kind} not found: {entity_id}")
        self.kind = kind
        self.entity_id = entity_id
