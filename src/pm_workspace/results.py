from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class WorkspaceError(Exception):
    """Base class for errors raised by the workspace core."""


class EntityNotFoundError(WorkspaceError, LookupError):
    """Raised by MutationResult.unwrap() when the target id did not resolve."""


class ReorderIndexError(WorkspaceError, IndexError):
    """Raised for out-of-range reorder indices when the 'raise' policy is configured."""


class RiceValidationError(WorkspaceError, ValueError):
    """Raised by stores running with strict validation for out-of-range RICE params."""


class Outcome(str, Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"


# PUBLIC_INTERFACE
@dataclass(frozen=True)
class MutationResult:
    """
    Result of an update/delete/reorder call.

    Missing ids are absorbed as no-ops; the outcome lets callers tell an
    applied change from an ignored one. The result is truthy only when the
    change was applied, so `if not repo.delete(x):` reads naturally.
    """

    outcome: Outcome
    entity: Optional[Any] = None
    target: Optional[Any] = None

    @classmethod
    def found(cls, entity: Optional[Any] = None, target: Optional[Any] = None) -> "MutationResult":
        return cls(Outcome.FOUND, entity, target)

    @classmethod
    def not_found(cls, target: Optional[Any] = None) -> "MutationResult":
        return cls(Outcome.NOT_FOUND, None, target)

    @property
    def is_found(self) -> bool:
        return self.outcome is Outcome.FOUND

    def __bool__(self) -> bool:
        return self.is_found

    def unwrap(self) -> Optional[Any]:
        """Return the affected entity, raising EntityNotFoundError if nothing was applied."""
        if not self.is_found:
            raise EntityNotFoundError(f"no entity matched {self.target!r}")
        return self.entity
