"""Tests for the getter/setter value pipeline."""

import pytest

from registered_attributes import AttributeDefinition, Datastream, DomainObject, attribute, has_metadata
from registered_attributes.config import AttributesConfig, RegistrationConfig, configure
from registered_attributes.core.accessors import read_value, write_value
from registered_attributes.core.models import InlineTransform, MethodTransform, Multiplicity


class Host:
    """Bare object satisfying the accessor host contract."""

    def __init__(self):
        self.datastreams = {"props": Datastream("props", ["tags", "title"])}
        self._attribute_values = {}

    def add_suffix(self, value):
        return [*value, self.suffix]


def _multiple(**kwargs) -> AttributeDefinition:
    return AttributeDefinition(
        name="tags",
        datastream="props",
        backing_field="tags",
        multiplicity=Multiplicity.MULTIPLE,
        **kwargs,
    )


class TestDelegatedPipeline:
    def test_blank_filtering_happens_before_writer(self):
        seen = []

        def writer(value):
            seen.append(list(value))
            return value

        host = Host()
        write_value(host, _multiple(writer=InlineTransform(function=writer)), ["x", "", "y", None])
        assert seen == [["x", "y"]]
        assert host.datastreams["props"].get("tags") == ["x", "y"]

    def test_whitespace_only_counts_as_blank(self):
        host = Host()
        write_value(host, _multiple(), ["x", "   ", "y"])
        assert read_value(host, _multiple()) == ["x", "y"]

    def test_whitespace_kept_when_strip_disabled(self):
        configure(AttributesConfig(registration=RegistrationConfig(strip_whitespace=False)))
        host = Host()
        write_value(host, _multiple(), ["x", "   ", ""])
        assert read_value(host, _multiple()) == ["x", "   "]

    def test_writer_may_change_length(self):
        host = Host()
        host.suffix = "derived"
        definition = _multiple(writer=MethodTransform(method_name="add_suffix"))
        write_value(host, definition, ["a"])
        assert read_value(host, definition) == ["a", "derived"]

    def test_method_writer_resolved_at_call_time(self):
        host = Host()
        host.suffix = "one"
        definition = _multiple(writer=MethodTransform(method_name="add_suffix"))
        write_value(host, definition, [])
        host.suffix = "two"
        write_value(host, definition, [])
        assert read_value(host, definition) == ["two"]

    def test_reader_applies_to_default(self):
        definition = _multiple(
            default=("a", "b"),
            reader=InlineTransform(function=lambda value: ", ".join(value)),
        )
        assert read_value(Host(), definition) == "a, b"

    def test_reader_does_not_touch_store(self):
        host = Host()
        definition = _multiple(reader=InlineTransform(function=len))
        write_value(host, definition, ["a", "b"])
        assert read_value(host, definition) == 2
        assert host.datastreams["props"].get("tags") == ["a", "b"]

    def test_default_returned_as_fresh_list(self):
        host = Host()
        definition = _multiple(default=("a",))
        first = read_value(host, definition)
        first.append("mutated")
        assert read_value(host, definition) == ["a"]

    def test_single_stores_one_element_list(self):
        host = Host()
        definition = AttributeDefinition(name="title", datastream="props", backing_field="title")
        write_value(host, definition, "")
        assert host.datastreams["props"].get("title") == [""]
        assert read_value(host, definition) == ""

    def test_single_reads_first_stored_element(self):
        host = Host()
        host.datastreams["props"].set("title", ["first", "second"])
        definition = AttributeDefinition(name="title", datastream="props", backing_field="title")
        assert read_value(host, definition) == "first"

    def test_single_none_clears_values(self):
        host = Host()
        definition = AttributeDefinition(
            name="title", datastream="props", backing_field="title", default="untitled"
        )
        assert read_value(host, definition) == "untitled"
        write_value(host, definition, None)
        assert host.datastreams["props"].get("title") == []
        assert read_value(host, definition) is None

    def test_transform_errors_propagate_unchanged(self):
        class Boom(Exception):
            pass

        def writer(value):
            raise Boom("nope")

        with pytest.raises(Boom, match="nope"):
            write_value(Host(), _multiple(writer=InlineTransform(function=writer)), ["a"])


class TestLocalPipeline:
    def test_multiple_without_datastream(self):
        host = Host()
        definition = AttributeDefinition(name="notes", multiplicity=Multiplicity.MULTIPLE)
        assert read_value(host, definition) == []
        write_value(host, definition, ["a", "", "b"])
        assert read_value(host, definition) == ["a", "b"]
        assert "notes" not in host.datastreams["props"].fields

    def test_local_default_and_writer(self):
        host = Host()
        definition = AttributeDefinition(
            name="status",
            default="draft",
            writer=InlineTransform(function=str.lower),
        )
        assert read_value(host, definition) == "draft"
        write_value(host, definition, "PUBLISHED")
        assert host._attribute_values["status"] == "published"
        assert read_value(host, definition) == "published"


class TestRedeclaredInSubclass:
    def test_subclass_redeclaration_does_not_change_parent(self):
        class Parent(DomainObject):
            props = has_metadata(fields=["title"])
            title = attribute(datastream="props")

        class Child(Parent):
            title = attribute(datastream="props", reader=str.upper)

        parent, child = Parent(title="hello"), Child(title="hello")
        assert parent.title == "hello"
        assert child.title == "HELLO"
        assert Child.registered_attribute_names() == ["title"]
