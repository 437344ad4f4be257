import re
from typing import Callable, Optional, Protocol, runtime_checkable

_DISALLOWED = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE = re.compile(r"\s+")
_HYPHENS = re.compile(r"-+")


@runtime_checkable
class SlugGenerator(Protocol):
    def generate(self, input: Optional[str]) -> Optional[str]:
        ...


def generate_slug(text: Optional[str]) -> Optional[str]:
    """Convert text to a URL-safe slug: lowercase, hyphens, no special chars.

    ``None`` passes through unchanged and an empty string stays empty.
    Whitespace becomes hyphens before hyphen runs are collapsed, so
    ``"a - b"`` and ``"a  b"`` both give ``"a-b"``. Edge hyphens are trimmed
    unless nothing else is left, so ``"   "`` gives ``"-"``.
    """
    if text is None:
        return None
    slug = text.lower()
    slug = _DISALLOWED.sub("", slug)
    slug = _WHITESPACE.sub("-", slug)
    slug = _HYPHENS.sub("-", slug)
    # all-hyphen input keeps its single hyphen
    if slug.strip("-"):
        slug = slug.strip("-")
    return slug


class DefaultSlugGenerator:
    """Built-in generator, see :func:`generate_slug`."""

    def generate(self, input: Optional[str]) -> Optional[str]:
        return generate_slug(input)


class FunctionSlugGenerator:
    """Adapts a plain ``text -> slug`` callable to the generator interface."""

    def __init__(self, func: Callable[[Optional[str]], Optional[str]]):
        self.func = func

    def generate(self, input: Optional[str]) -> Optional[str]:
        if input is None:
            return None
        return self.func(input)

    def __repr__(self) -> str:
        return f"FunctionSlugGenerator({self.func!r})"
