"""Tests for display schema building."""
import pytest
from dataclasses import dataclass, field
from typing import Any, Optional

from conftest import BasicSection, Token
from webcfg import Field, build_schema
from webcfg.registry import get_section_spec


def test_sections_in_declaration_order(config):
    """Only exported dataclass members become sections, in order."""
    sections = build_schema(config)
    assert [s.title for s in sections] == ["section1", "section2"]
    assert [s.action for s in sections] == ["section1", "section2"]


def test_fields_in_declaration_order(config):
    """Skipped and unexported fields are omitted."""
    section1 = build_schema(config)[0]
    assert [f.name for f in section1.fields] == [
        "string_field",
        "bool_field",
        "int_field",
        "uint_field",
        "float_field",
        "custom_field",
    ]


def test_field_descriptor_applied(config):
    config.section1.string_field = "hello"
    string_field = build_schema(config)[0].fields[0]
    assert string_field == Field(
        name="string_field",
        label="String Field",
        value="hello",
        type="text",
        icon="icon",
        status="status",
        help="help",
    )


def test_field_values_are_live(config):
    """The schema reflects changes made outside the form."""
    assert build_schema(config)[0].fields[2].value == "0"
    config.section1.int_field = 99
    assert build_schema(config)[0].fields[2].value == "99"


def test_checkbox_field(config):
    config.section1.bool_field = True
    bool_field = build_schema(config)[0].fields[1]
    assert bool_field.type == "checkbox"
    assert bool_field.checked


def test_custom_codec_value(config):
    config.section1.custom_field = Token("abc")
    assert build_schema(config)[0].fields[5].value == "abc"


def test_custom_codec_failure_does_not_break_schema(config):
    config.section1.custom_field = Token("marshal_error")
    custom = build_schema(config)[0].fields[5]
    assert custom.value == ""


def test_nested_dataclass_is_opaque_leaf():
    @dataclass
    class Inner:
        depth: int = 2

    @dataclass
    class Outer:
        inner: Inner = field(default_factory=Inner)
        name: str = "x"

    @dataclass
    class Root:
        outer: Outer = field(default_factory=Outer)

    (section,) = build_schema(Root())
    assert [f.name for f in section.fields] == ["inner", "name"]
    assert section.fields[0].value == "test_nested_dataclass_is_opaque_leaf.<locals>.Inner(depth=2)"


def test_uninitialized_section_renders_empty_values():
    @dataclass
    class Section:
        host: str = "localhost"
        enabled: bool = True

    @dataclass
    class Root:
        section: Optional[Section] = None

    (section,) = build_schema(Root())
    assert [(f.name, f.value) for f in section.fields] == [("host", ""), ("enabled", "")]
    assert section.fields[1].type == "checkbox"


def test_untyped_field_classified_from_value():
    @dataclass
    class Section:
        anything: Any = True

    @dataclass
    class Root:
        section: Section = field(default_factory=Section)

    (section,) = build_schema(Root())
    assert section.fields[0].type == "checkbox"
    assert section.fields[0].value == "true"


def test_empty_root():
    @dataclass
    class Empty:
        pass

    assert build_schema(Empty()) == []


def test_non_dataclass_root_rejected():
    with pytest.raises(TypeError):
        build_schema(object())


def test_section_spec_is_cached():
    assert get_section_spec(BasicSection) is get_section_spec(BasicSection)


def test_section_spec_excludes_skipped_and_private():
    attrs = [f.attr for f in get_section_spec(BasicSection).fields]
    assert "ignored_field" not in attrs
    assert "_unexported" not in attrs
