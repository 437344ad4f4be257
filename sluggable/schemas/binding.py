from typing import Tuple

from pydantic import BaseModel, ConfigDict, field_validator


class SlugBinding(BaseModel):
    """Where a sluggable entity reads its slug source and scope fields."""

    model_config = ConfigDict(frozen=True)

    source: str
    scope: Tuple[str, ...] = ()

    @field_validator("source")
    @classmethod
    def source_is_identifier(cls, value: str) -> str:
        if not value.isidentifier():
            raise ValueError(f"slug source must be an attribute name, got {value!r}")
        if value == "slug":
            raise ValueError("slug source cannot be the slug field itself")
        return value

    @field_validator("scope")
    @classmethod
    def scope_fields_are_distinct(cls, value: Tuple[str, ...]) -> Tuple[str, ...]:
        for name in value:
            if not name.isidentifier():
                raise ValueError(f"scope field must be an attribute name, got {name!r}")
        if "slug" in value:
            raise ValueError("scope cannot include the slug field")
        if len(set(value)) != len(value):
            raise ValueError(f"duplicate scope fields: {value!r}")
        return value
