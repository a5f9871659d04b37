"""Identity generators injected into the entity store."""

import itertools
import uuid
from typing import Protocol


class IdGenerator(Protocol):
    """Produces a new unique id for an entity of the given kind."""

    def __call__(self, kind: str) -> str: ...


class UuidIdGenerator:
    """Random UUID4 ids, prefixed with the entity kind (e.g. ``team_3f2a...``)."""

    def __call__(self, kind: str) -> str:
        return f"{kind}_{uuid.uuid4().hex}"


class SequentialIdGenerator:
    """Monotonic counter ids (``team_1``, ``player_2``, ...)."""

    def __init__(self, start: int = 1):
        self._counter = itertools.count(start)

    def __call__(self, kind: str) -> str:
        return f"{kind}_{next(self._counter)}"

    def skip_past(self, ids) -> None:
        """Advance the counter beyond any numeric suffix in ``ids``."""
        highest = 0
        for entity_id in ids:
            _, _, suffix = str(entity_id).rpartition("_")
            if suffix.isdigit():
                highest = max(highest, int(suffix))
        current = next(self._counter)
        self._counter = itertools.count(max(current, highest + 1))


def make_id_generator(mode: str) -> IdGenerator:
    """Build an id generator from a config value (``uuid`` or ``sequential``)."""
    if mode == "sequential":
        return SequentialIdGenerator()
    if mode == "uuid":
        return UuidIdGenerator()
    raise ValueError(f"Unknown id mode: {mode}. Expected 'uuid' or 'sequential'")
