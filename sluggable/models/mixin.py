from typing import Any, ClassVar, Optional, Tuple

from pydantic import ValidationError
from sqlalchemy import Column, String, inspect
from sqlalchemy.orm import declared_attr

from sluggable.core.exceptions import SlugBindingError
from sluggable.schemas.binding import SlugBinding


class SluggableMixin:
    """Mixin for mapped classes that get a slug assigned on flush.

    Subclasses name the attribute the slug is generated from and, optionally,
    the companion fields the slug is unique within::

        class Page(SluggableMixin, Base):
            __tablename__ = "pages"
            __slug_source__ = "title"
            __slug_scope__ = ("locale",)
            __table_args__ = (UniqueConstraint("locale", "slug"),)

    Without a scope the ``slug`` column is unique on its own. With a scope the
    model must declare the composite unique constraint itself.
    """

    __slug_source__: ClassVar[Optional[str]] = None
    __slug_scope__: ClassVar[Tuple[str, ...]] = ()
    __slug_binding__: ClassVar[Optional[SlugBinding]] = None

    @declared_attr
    def slug(cls):
        return Column(String(255), nullable=False, index=True, unique=not cls.__slug_scope__)

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        if cls.__slug_source__ is None:
            return
        scope = cls.__slug_scope__
        if isinstance(scope, str):
            scope = (scope,)
        try:
            binding = SlugBinding(source=cls.__slug_source__, scope=tuple(scope))
        except ValidationError as e:
            raise SlugBindingError(f"Invalid slug declaration on {cls.__name__}: {e}", e)
        for name in (binding.source,) + binding.scope:
            if not hasattr(cls, name):
                raise SlugBindingError(f"{cls.__name__} has no attribute {name!r}")
        cls.__slug_binding__ = binding

    @property
    def slug_identity(self) -> Any:
        """Primary key of the persisted row, or None before the first flush."""
        identity = inspect(self).identity
        if identity is None:
            return None
        return identity[0] if len(identity) == 1 else identity

    def get_slug_source(self) -> Optional[str]:
        binding = type(self).__slug_binding__
        if binding is None:
            return None
        value = getattr(self, binding.source, None)
        if isinstance(value, str) and value.strip():
            return value
        return None
