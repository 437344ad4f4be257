import importlib
import logging
from typing import Any, Optional

from sluggable.core.config import Settings, settings as default_settings
from sluggable.core.exceptions import MisconfiguredGeneratorError, MisconfiguredProviderError
from sluggable.db.listener import SlugListener
from sluggable.services.provider import SlugProvider, SQLAlchemySlugProvider
from sluggable.services.resolver import DEFAULT_MAX_ATTEMPTS, ExistenceCheck, SlugResolver
from sluggable.utils.slug import DefaultSlugGenerator, FunctionSlugGenerator, SlugGenerator

logger = logging.getLogger(__name__)


def load_generator(path: str) -> SlugGenerator:
    """Import and instantiate a generator from ``"module:Name"`` or ``"module.Name"``."""
    module_name, sep, attr = path.partition(":")
    if not sep:
        module_name, _, attr = path.rpartition(".")
    if not module_name or not attr:
        raise MisconfiguredGeneratorError(f"Invalid slug generator path: {path!r}")

    try:
        target = getattr(importlib.import_module(module_name), attr)
    except (ImportError, AttributeError) as e:
        raise MisconfiguredGeneratorError(f"Cannot load slug generator {path!r}: {e}", e)

    return _as_generator(target)


def _as_generator(generator: Any) -> SlugGenerator:
    if isinstance(generator, type):
        try:
            generator = generator()
        except TypeError as e:
            raise MisconfiguredGeneratorError(
                f"Cannot instantiate slug generator {generator.__name__}: {e}", e
            )
    if isinstance(generator, SlugGenerator):
        return generator
    if callable(generator):
        return FunctionSlugGenerator(generator)
    raise MisconfiguredGeneratorError(
        f"{generator!r} is neither a slug generator nor a callable"
    )


class SlugContext:
    """The active generator and provider, plus the resolver limits.

    Built once at startup (usually by :func:`enable_slug`) and handed to the
    listener that assigns slugs on flush.
    """

    def __init__(
        self,
        generator: Optional[Any] = None,
        provider: Optional[SlugProvider] = None,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        fail_open: bool = True,
    ):
        self._generator: Optional[SlugGenerator] = None
        self._provider = provider
        self.max_attempts = max_attempts
        self.fail_open = fail_open
        self.listener: Optional[SlugListener] = None
        if generator is not None:
            self.set_generator(generator)

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        generator: Optional[Any] = None,
        provider: Optional[SlugProvider] = None,
    ) -> "SlugContext":
        settings = settings or default_settings
        if generator is None:
            if settings.SLUG_GENERATOR:
                generator = load_generator(settings.SLUG_GENERATOR)
            else:
                generator = DefaultSlugGenerator()
        return cls(
            generator=generator,
            provider=provider or SQLAlchemySlugProvider(),
            max_attempts=settings.SLUG_MAX_ATTEMPTS,
            fail_open=settings.SLUG_FAIL_OPEN,
        )

    @property
    def generator(self) -> SlugGenerator:
        if self._generator is None:
            raise MisconfiguredGeneratorError()
        return self._generator

    def set_generator(self, generator: Any) -> None:
        if generator is None:
            raise MisconfiguredGeneratorError("SlugGenerator cannot be None")
        self._generator = _as_generator(generator)

    @property
    def provider(self) -> SlugProvider:
        if self._provider is None:
            raise MisconfiguredProviderError()
        return self._provider

    def set_provider(self, provider: SlugProvider) -> None:
        if provider is None:
            raise MisconfiguredProviderError("SlugProvider cannot be None")
        self._provider = provider

    def generate(self, text: Optional[str]) -> Optional[str]:
        return self.generator.generate(text)

    def resolver(self, exists: ExistenceCheck) -> SlugResolver:
        return SlugResolver(exists, max_attempts=self.max_attempts, fail_open=self.fail_open)

    def disable(self) -> None:
        """Stop assigning slugs on flush."""
        if self.listener is not None:
            self.listener.remove()
            self.listener = None


def enable_slug(
    target: Any = None,
    settings: Optional[Settings] = None,
    generator: Optional[Any] = None,
    provider: Optional[SlugProvider] = None,
) -> SlugContext:
    """Turn on slug assignment for sessions created from ``target``.

    ``target`` is anything SQLAlchemy accepts for session events: the
    ``Session`` class (the default, every session), a ``sessionmaker`` or a
    single session. ``generator`` overrides ``SLUG_GENERATOR``.
    """
    settings = settings or default_settings
    context = SlugContext.from_settings(settings, generator=generator, provider=provider)

    if not settings.SLUG_ENABLED:
        logger.info("Slug generation disabled (SLUG_ENABLED is false).")
        return context

    context.listener = SlugListener(context)
    context.listener.install(target)
    return context
