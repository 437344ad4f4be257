import logging
from typing import Any, List, Mapping, Optional, Protocol, Tuple

from sqlalchemy import func, inspect, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from sluggable.core.exceptions import SlugBindingError
from sluggable.schemas.binding import SlugBinding

logger = logging.getLogger(__name__)


class SlugProvider(Protocol):
    """Persistence operations the slug subsystem needs."""

    def exists(
        self,
        session: Session,
        entity_type: type,
        candidate: str,
        exclude_identity: Any = None,
        scope_filters: Optional[Mapping[str, Any]] = None,
    ) -> bool:
        ...

    def fetch_prior_source_value(
        self, session: Session, entity_type: type, identity: Any
    ) -> Optional[str]:
        ...

    def declared_scope_fields(self, entity_type: type) -> List[str]:
        ...


def _binding(entity_type: type) -> SlugBinding:
    binding = getattr(entity_type, "__slug_binding__", None)
    if binding is None:
        raise SlugBindingError(f"{entity_type.__name__} does not declare __slug_source__")
    return binding


def _identity_tuple(identity: Any) -> Tuple[Any, ...]:
    return identity if isinstance(identity, tuple) else (identity,)


class SQLAlchemySlugProvider:
    """Answers slug questions with queries on the flushing session."""

    def exists(
        self,
        session: Session,
        entity_type: type,
        candidate: str,
        exclude_identity: Any = None,
        scope_filters: Optional[Mapping[str, Any]] = None,
    ) -> bool:
        """True if another row of ``entity_type`` holds ``candidate`` (case-insensitive).

        The row identified by ``exclude_identity`` is ignored, and the search is
        limited to rows whose scope fields equal ``scope_filters``. Scope
        fields the class does not map are skipped.
        """
        if not candidate or not candidate.strip():
            return False

        mapper = inspect(entity_type)
        primary_key = mapper.primary_key

        with session.no_autoflush:
            query = session.query(*primary_key).filter(
                func.lower(entity_type.slug) == candidate.lower()
            )
            for name, value in (scope_filters or {}).items():
                if name not in mapper.attrs:
                    logger.debug("%s has no mapped attribute %r; skipping scope filter",
                                 entity_type.__name__, name)
                    continue
                query = query.filter(getattr(entity_type, name) == value)
            if exclude_identity is not None:
                identity = _identity_tuple(exclude_identity)
                query = query.filter(
                    or_(*[column != value for column, value in zip(primary_key, identity)])
                )
            return query.first() is not None

    def fetch_prior_source_value(
        self, session: Session, entity_type: type, identity: Any
    ) -> Optional[str]:
        """Source value currently stored for the row ``identity``, if any.

        A failed query is logged and reported as None.
        """
        if identity is None:
            return None
        binding = _binding(entity_type)
        primary_key = inspect(entity_type).primary_key
        values = _identity_tuple(identity)

        try:
            with session.no_autoflush:
                row = (
                    session.query(getattr(entity_type, binding.source))
                    .filter(*[column == value for column, value in zip(primary_key, values)])
                    .first()
                )
        except SQLAlchemyError:
            logger.warning("Could not read prior %s.%s for %r",
                           entity_type.__name__, binding.source, identity, exc_info=True)
            return None
        if row is None:
            return None
        return row[0]

    def declared_scope_fields(self, entity_type: type) -> List[str]:
        return list(_binding(entity_type).scope)
