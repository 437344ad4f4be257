import logging
from typing import Any, Callable, Dict, Iterable, Optional

logger = logging.getLogger(__name__)


def extract_scope_filters(entity: Any, fields: Iterable[str]) -> Dict[str, Any]:
    """Map each declared scope field to its current value on ``entity``.

    Declaration order is kept. Fields that are unset or cannot be read are
    left out, which widens the uniqueness check rather than failing it.
    """
    filters: Dict[str, Any] = {}
    for name in fields:
        try:
            value = getattr(entity, name)
        except Exception:
            logger.debug(
                "Could not read scope field %r on %s; leaving it out",
                name, type(entity).__name__, exc_info=True,
            )
            continue
        if value is None:
            continue
        filters[name] = value
    return filters


def is_source_changed(
    prior_lookup: Callable[[type, Any], Optional[str]],
    entity: Any,
    source_value: str,
) -> bool:
    """Whether ``entity`` needs a fresh slug.

    True when the entity has no slug yet, has never been persisted, its
    previous source value cannot be looked up, or that value differs from
    ``source_value``.
    """
    if getattr(entity, "slug", None) is None:
        return True

    identity = entity.slug_identity
    if identity is None:
        return True

    try:
        prior = prior_lookup(type(entity), identity)
    except Exception:
        logger.debug("Prior source lookup failed for %s", type(entity).__name__, exc_info=True)
        return True

    if prior is None:
        return True
    return prior != source_value
