import logging
from typing import Any, Callable, Dict, Iterator, Mapping, Optional

from sluggable.core.exceptions import BlankCandidateError, ExhaustedAttemptsError

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 100

ExistenceCheck = Callable[[type, str, Any, Mapping[str, Any]], bool]


def candidate_slugs(base: str, max_attempts: int = DEFAULT_MAX_ATTEMPTS) -> Iterator[str]:
    """Yield ``base``, ``base-2``, ``base-3``, ... (``max_attempts`` values in total)."""
    if max_attempts < 1:
        return
    yield base
    for suffix in range(2, max_attempts + 1):
        yield f"{base}-{suffix}"


class SlugResolver:
    """Finds the first candidate slug that no other row already holds.

    ``exists(entity_type, candidate, exclude_identity, scope_filters)`` is
    asked about each candidate in turn. Candidates are probed one at a time
    and in order; the resolver keeps no state between calls to
    :meth:`resolve`.

    When ``exists`` raises, the failure is logged and, with ``fail_open``
    set, the candidate is accepted as if it were free. This keeps saves
    available while the check is broken but can let a duplicate through,
    which the database unique constraint then has to reject. With
    ``fail_open`` unset the candidate is treated as taken instead.
    """

    def __init__(
        self,
        exists: ExistenceCheck,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        fail_open: bool = True,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.exists = exists
        self.max_attempts = max_attempts
        self.fail_open = fail_open

    def resolve(
        self,
        entity_type: type,
        base: Optional[str],
        exclude_identity: Any = None,
        scope_filters: Optional[Mapping[str, Any]] = None,
    ) -> str:
        if base is None or not base.strip():
            raise BlankCandidateError(f"Base slug cannot be blank for {entity_type.__name__}")

        filters: Dict[str, Any] = dict(scope_filters or {})
        attempts = 0
        for candidate in candidate_slugs(base, self.max_attempts):
            if not self._collides(entity_type, candidate, exclude_identity, filters):
                return candidate
            attempts += 1
            logger.debug(
                "Slug %r taken for %s (attempt %d/%d)",
                candidate, entity_type.__name__, attempts, self.max_attempts,
            )

        raise ExhaustedAttemptsError(base, attempts)

    def _collides(
        self,
        entity_type: type,
        candidate: str,
        exclude_identity: Any,
        filters: Dict[str, Any],
    ) -> bool:
        try:
            return bool(self.exists(entity_type, candidate, exclude_identity, filters))
        except Exception:
            logger.warning(
                "Slug existence check failed for %s %r; treating as %s",
                entity_type.__name__, candidate,
                "free" if self.fail_open else "taken",
                exc_info=True,
            )
            return not self.fail_open
