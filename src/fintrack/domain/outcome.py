"""Typed outcome of applying an engine mutation."""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar

from fintrack.domain.errors import DomainError

logger = logging.getLogger(__name__)

S = TypeVar("S")


@dataclass(frozen=True)
class MutationOutcome(Generic[S]):
    """Result of a mutation.

    On success ``snapshot`` is the new snapshot. On failure it is the prior
    snapshot, untouched, and ``error`` says why the mutation was refused.
    """

    snapshot: S
    error: Optional[DomainError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def apply_mutation(
    operation: Callable[..., S], snapshot: S, *args: Any, **kwargs: Any
) -> MutationOutcome[S]:
    """Run ``operation(snapshot, *args, **kwargs)`` and capture domain errors."""
    try:
        return MutationOutcome(snapshot=operation(snapshot, *args, **kwargs))
    except DomainError as e:
        logger.debug("%s refused: %s", operation.__name__, e)
        return MutationOutcome(snapshot=snapshot, error=e)
