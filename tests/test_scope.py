from unittest.mock import Mock

from sluggable.services.scope import extract_scope_filters, is_source_changed

from slug_models import Article, Page


class Broken:
    locale = "en"
    region = None

    @property
    def tenant(self):
        raise RuntimeError("detached")


class TestExtractScopeFilters:
    def test_keeps_declaration_order(self):
        entity = Mock(locale="en", tenant=3, region="eu")
        filters = extract_scope_filters(entity, ["tenant", "locale", "region"])

        assert list(filters.items()) == [("tenant", 3), ("locale", "en"), ("region", "eu")]

    def test_omits_none_and_unreadable_fields(self):
        filters = extract_scope_filters(Broken(), ["tenant", "locale", "region", "missing"])
        assert filters == {"locale": "en"}

    def test_no_fields_means_global_scope(self):
        assert extract_scope_filters(Page(locale="en", title="x"), []) == {}

    def test_reads_mapped_attributes(self):
        page = Page(locale="de", title="Hallo")
        assert extract_scope_filters(page, ("locale",)) == {"locale": "de"}


class TestIsSourceChanged:
    def test_entity_without_slug(self):
        lookup = Mock()
        assert is_source_changed(lookup, Article(title="Hello"), "Hello")
        lookup.assert_not_called()

    def test_unpersisted_entity_with_manual_slug(self):
        lookup = Mock()
        assert is_source_changed(lookup, Article(title="Hello", slug="custom"), "Hello")
        lookup.assert_not_called()


class Persisted:
    """Stand-in for a persisted entity."""

    def __init__(self, slug, identity):
        self.slug = slug
        self.slug_identity = identity


class TestIsSourceChangedPersisted:
    def test_unchanged_source(self):
        lookup = Mock(return_value="Hello")
        assert not is_source_changed(lookup, Persisted("hello", 5), "Hello")
        lookup.assert_called_once_with(Persisted, 5)

    def test_changed_source(self):
        lookup = Mock(return_value="Hello")
        assert is_source_changed(lookup, Persisted("hello", 5), "Goodbye")

    def test_missing_prior_row(self):
        assert is_source_changed(Mock(return_value=None), Persisted("hello", 5), "Hello")

    def test_lookup_failure_resolves(self):
        lookup = Mock(side_effect=RuntimeError("connection lost"))
        assert is_source_changed(lookup, Persisted("hello", 5), "Hello")
