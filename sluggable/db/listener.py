import logging
from functools import partial
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Tuple

from sqlalchemy import event
from sqlalchemy.orm import Session

from sluggable.core.exceptions import SlugOperationError
from sluggable.models.mixin import SluggableMixin
from sluggable.services.scope import extract_scope_filters, is_source_changed

if TYPE_CHECKING:
    from sluggable.core.context import SlugContext

logger = logging.getLogger(__name__)

Claims = Dict[type, List[Tuple[Dict[str, Any], str]]]


def _within_scope(claim_filters: Mapping[str, Any], filters: Mapping[str, Any]) -> bool:
    """Whether a claim made under ``claim_filters`` falls inside the ``filters`` scope."""
    return all(name in claim_filters and claim_filters[name] == value
               for name, value in filters.items())


class SlugListener:
    """Assigns slugs to sluggable objects right before a session flushes them.

    New objects always get a slug. Modified objects get a new one only when
    they have no slug yet or their source value differs from the stored row.
    Slugs handed out earlier in the same flush count as taken wherever the
    database check would have seen them, so two new objects with the same
    title get distinct slugs.
    """

    def __init__(self, context: "SlugContext"):
        self.context = context
        self.target: Any = None

    def install(self, target: Any = None) -> None:
        target = Session if target is None else target
        event.listen(target, "before_flush", self.before_flush)
        self.target = target
        logger.info("Slug listener installed on %r", target)

    def remove(self) -> None:
        if self.target is None:
            return
        event.remove(self.target, "before_flush", self.before_flush)
        logger.info("Slug listener removed from %r", self.target)
        self.target = None

    def before_flush(self, session: Session, flush_context: Any, instances: Any) -> None:
        claimed: Claims = {}
        for entity in self._sluggable_entities(session):
            self.assign_slug(session, entity, claimed)

    def _sluggable_entities(self, session: Session) -> List[SluggableMixin]:
        deleted = session.deleted
        candidates = list(session.new) + [obj for obj in session.dirty if obj not in deleted]
        return [
            obj for obj in candidates
            if isinstance(obj, SluggableMixin) and type(obj).__slug_binding__ is not None
        ]

    def assign_slug(
        self,
        session: Session,
        entity: SluggableMixin,
        claimed: Optional[Claims] = None,
    ) -> Optional[str]:
        """Give ``entity`` a unique slug if it needs one and return its slug.

        Returns None, leaving the slug untouched, when the source value is
        empty. Any failure surfaces as :class:`SlugOperationError`.
        """
        try:
            return self._assign(session, entity, {} if claimed is None else claimed)
        except SlugOperationError:
            raise
        except Exception as e:
            raise SlugOperationError(
                f"Slug assignment failed for {type(entity).__name__}: {e}", e
            )

    def _assign(
        self,
        session: Session,
        entity: SluggableMixin,
        claimed: Claims,
    ) -> Optional[str]:
        entity_type = type(entity)
        source_value = entity.get_slug_source()
        if source_value is None:
            return None

        provider = self.context.provider
        prior_lookup = partial(provider.fetch_prior_source_value, session)
        if not is_source_changed(prior_lookup, entity, source_value):
            return entity.slug

        base = self.context.generate(source_value)
        scope_filters = extract_scope_filters(entity, provider.declared_scope_fields(entity_type))
        claims = claimed.setdefault(entity_type, [])

        def exists(entity_type, candidate, exclude_identity, filters):
            lowered = candidate.lower()
            if any(slug == lowered and _within_scope(claim_filters, filters)
                   for claim_filters, slug in claims):
                return True
            return provider.exists(session, entity_type, candidate, exclude_identity, filters)

        slug = self.context.resolver(exists).resolve(
            entity_type, base, entity.slug_identity, scope_filters
        )
        entity.slug = slug
        claims.append((scope_filters, slug.lower()))
        logger.info("Assigned slug %r to %s", slug, entity_type.__name__)
        return slug
