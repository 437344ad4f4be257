"""Unique, URL-safe slugs for SQLAlchemy entities, assigned on flush."""

import logging

from sluggable.core.context import SlugContext, enable_slug, load_generator
from sluggable.core.exceptions import (
    BlankCandidateError,
    ExhaustedAttemptsError,
    MisconfiguredGeneratorError,
    MisconfiguredProviderError,
    SlugBindingError,
    SlugOperationError,
)
from sluggable.db.listener import SlugListener
from sluggable.models.mixin import SluggableMixin
from sluggable.services.provider import SlugProvider, SQLAlchemySlugProvider
from sluggable.services.resolver import SlugResolver, candidate_slugs
from sluggable.services.scope import extract_scope_filters, is_source_changed
from sluggable.utils.slug import DefaultSlugGenerator, SlugGenerator, generate_slug

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "BlankCandidateError",
    "DefaultSlugGenerator",
    "ExhaustedAttemptsError",
    "MisconfiguredGeneratorError",
    "MisconfiguredProviderError",
    "SQLAlchemySlugProvider",
    "SlugBindingError",
    "SlugContext",
    "SlugGenerator",
    "SlugListener",
    "SlugOperationError",
    "SlugProvider",
    "SlugResolver",
    "SluggableMixin",
    "candidate_slugs",
    "enable_slug",
    "extract_scope_filters",
    "generate_slug",
    "is_source_changed",
    "load_generator",
]
