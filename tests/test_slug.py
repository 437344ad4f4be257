import pytest

from sluggable.utils.slug import DefaultSlugGenerator, FunctionSlugGenerator, generate_slug

SAMPLES = [
    "Hello World! This is a test.",
    "  Leading and trailing  ",
    "a - b",
    "a  b",
    "Multiple---hyphens -- here",
    "Tabs\tand\nnewlines",
    "Ünïcödé Çharacters",
    "snake_case_name",
    "---",
    "!!!",
    "123 Numbers 456",
    "",
]


def test_none_passes_through():
    assert generate_slug(None) is None


def test_empty_string_stays_empty():
    assert generate_slug("") == ""


def test_title_example():
    assert generate_slug("Hello World! This is a test.") == "hello-world-this-is-a-test"


def test_whitespace_and_hyphen_runs_normalize_the_same():
    assert generate_slug("a - b") == "a-b"
    assert generate_slug("a  b") == "a-b"
    assert generate_slug("a---b") == "a-b"


def test_non_ascii_and_underscores_are_dropped():
    assert generate_slug("Café_Crème") == "cafcrme"


def test_leading_and_trailing_hyphens_are_stripped():
    assert generate_slug("  - Hello -  ") == "hello"
    assert generate_slug("-hello-") == "hello"


@pytest.mark.parametrize("text", ["   ", "---", " - - ", "\t-\n"])
def test_hyphen_only_input_keeps_one_hyphen(text):
    assert generate_slug(text) == "-"


@pytest.mark.parametrize("text", SAMPLES)
def test_output_alphabet(text):
    slug = generate_slug(text)
    assert all(c.islower() and c.isascii() or c.isdigit() or c == "-" for c in slug)
    assert "--" not in slug
    if slug != "-":
        assert not slug.startswith("-")
        assert not slug.endswith("-")


@pytest.mark.parametrize("text", SAMPLES)
def test_idempotent(text):
    once = generate_slug(text)
    assert generate_slug(once) == once


def test_default_generator_delegates():
    generator = DefaultSlugGenerator()
    assert generator.generate("Hello World") == "hello-world"
    assert generator.generate(None) is None


def test_function_generator_keeps_none():
    calls = []

    def upper(text):
        calls.append(text)
        return text.upper()

    generator = FunctionSlugGenerator(upper)
    assert generator.generate(None) is None
    assert generator.generate("abc") == "ABC"
    assert calls == ["abc"]
