"""Tests for validation bindings and rule evaluation."""

import pytest

from registered_attributes import (
    DomainObject,
    InvalidOptionError,
    Severity,
    ValidationEngine,
    ValidationResult,
    attribute,
    has_metadata,
)


class Article(DomainObject):
    properties = has_metadata(fields=["title", "language", "doi", "keywords"])

    title = attribute(
        datastream="properties",
        validates={"presence": True, "length": {"minimum": 3, "maximum": 20}},
    )
    language = attribute(datastream="properties", validates={"inclusion": ["en", "fr"]})
    doi = attribute(datastream="properties", validates={"format": {"with": r"^10\.\d+/"}})
    keywords = attribute(
        datastream="properties",
        multiple=True,
        validates={"presence": True, "length": {"maximum": 5}},
    )


def _valid_article(**overrides) -> Article:
    values = {
        "title": "Graphs",
        "language": "en",
        "doi": "10.1000/xyz",
        "keywords": ["a", "b"],
    }
    values.update(overrides)
    return Article(**values)


class TestRules:
    def test_valid_article(self):
        article = _valid_article()
        assert article.valid()
        assert len(article.errors) == 0

    def test_presence(self):
        article = _valid_article(title=None)
        assert not article.valid()
        assert article.errors["title"] == ["can't be blank"]

    def test_presence_on_multiple_after_blank_filtering(self):
        article = _valid_article(keywords=["", " "])
        assert not article.valid()
        assert article.errors["keywords"] == ["can't be blank"]

    def test_length(self):
        article = _valid_article(title="ab")
        assert not article.valid()
        assert "too short" in article.errors["title"][0]

    def test_length_applies_per_element(self):
        article = _valid_article(keywords=["ok", "far too long"])
        assert not article.valid()
        assert len(article.errors["keywords"]) == 1

    def test_inclusion(self):
        article = _valid_article(language="de")
        assert not article.valid()
        assert article.errors.errors[0].category == "INCLUSION"

    def test_format(self):
        article = _valid_article(doi="not-a-doi")
        assert not article.valid()
        assert article.errors["doi"] == ["'not-a-doi' is invalid"]

    def test_blank_optional_values_skip_rules(self):
        article = _valid_article(language=None, doi=None)
        assert article.valid()

    def test_errors_empty_before_validation(self):
        article = Article()
        assert article.errors.issues == []


class TestEngine:
    def test_bind_and_copy_are_independent(self):
        engine = ValidationEngine()
        engine.bind("title", {"presence": True})
        child = engine.copy()
        child.bind("extra", {"presence": True})
        assert "extra" not in engine
        assert "title" in child
        assert len(child) == 2

    def test_bind_rejects_non_mapping(self):
        with pytest.raises(InvalidOptionError):
            ValidationEngine().bind("title", True)

    @pytest.mark.parametrize(
        "spec",
        [
            {"length": 3},
            {"length": {"min": 1}},
            {"inclusion": "en"},
            {"format": {"with": "("}},
            {"uniqueness": True},
        ],
    )
    def test_bind_rejects_bad_specs(self, spec):
        with pytest.raises(InvalidOptionError):
            ValidationEngine().bind("title", spec)

    def test_bindings_returns_copies(self):
        engine = ValidationEngine()
        engine.bind("title", {"presence": True})
        engine.bindings()["title"]["presence"] = False
        assert engine.bindings() == {"title": {"presence": True}}

    def test_subclass_bindings_do_not_leak_to_parent(self):
        class Strict(Article):
            summary = attribute(validates={"presence": True})

        assert "summary" in Strict.validation_engine
        assert "summary" not in Article.validation_engine


class TestValidationResult:
    def test_warnings_do_not_invalidate(self):
        result = ValidationResult()
        result.add_warning(category="STYLE", location="title", message="shouty")
        assert result.valid
        assert result.warnings[0].severity == Severity.WARNING
        assert result.for_attribute("title") == []

    def test_issue_str(self):
        result = ValidationResult()
        result.add_error(category="PRESENCE", location="title", message="can't be blank")
        assert str(result.errors[0]) == "[PRESENCE] title: can't be blank"


class TestRedeclaredRules:
    def test_redeclaring_without_validates_drops_inherited_rule(self):
        class Parent(DomainObject):
            props = has_metadata(fields=["title"])
            title = attribute(datastream="props", validates={"presence": True})

        class Child(Parent):
            title = attribute(datastream="props")

        assert Child.attribute_registry.fetch("title").validates is None
        assert "title" not in Child.validation_engine
        assert Child().valid() is True
        assert Parent().valid() is False

    def test_redeclaring_with_validates_replaces_inherited_rule(self):
        class Parent(DomainObject):
            title = attribute(validates={"presence": True})

        class Child(Parent):
            title = attribute(validates={"length": {"maximum": 3}})

        assert Child.validation_engine.bindings() == {"title": {"length": {"maximum": 3}}}
        assert Child().valid() is True

    def test_unbind_missing_name_is_noop(self):
        engine = ValidationEngine()
        engine.bind("title", {"presence": True})
        engine.unbind("summary")
        engine.unbind("title")
        assert len(engine) == 0
