"""Explicit create/update commands for store writes."""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from pydantic import BaseModel

DraftT = TypeVar("DraftT", bound=BaseModel)
EntityT = TypeVar("EntityT", bound=BaseModel)


@dataclass(frozen=True)
class Create(Generic[DraftT]):
    """Create a new entity from a draft. The store assigns the id."""

    draft: DraftT


@dataclass(frozen=True)
class Update(Generic[EntityT]):
    """Replace the stored entity that has the same id."""

    entity: EntityT


SaveCommand = Union[Create, Update]
