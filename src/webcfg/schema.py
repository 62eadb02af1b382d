"""
Display schema derived from a live configuration object.

build_schema() walks the root dataclass two levels deep: dataclass members of
the root are sections, the exported members of each section are fields.
Deeper dataclasses are opaque leaf values shown through their text encoding.

The schema is rebuilt on every call so it always reflects the current object,
including changes made outside the web form. Only per-type introspection is
cached (see webcfg.registry).
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional

from webcfg.codec import encode_value
from webcfg.registry import FieldSpec, SectionSpec, get_root_spec, get_section_spec
from webcfg.tags import CHECKBOX_TYPE


@dataclass
class Field:
    """One form control."""
    name: str
    label: str
    value: str = ""
    type: str = "text"
    icon: str = ""
    status: str = ""
    help: str = ""
    readonly: bool = False

    @property
    def checked(self) -> bool:
        return self.type == CHECKBOX_TYPE and self.value == "true"


@dataclass
class Section:
    """One form with its own submit action."""
    title: str
    action: str
    subtitle: str = ""
    fields: List[Field] = field(default_factory=list)


def build_field(spec_field: FieldSpec, value: Any) -> Field:
    descriptor, kind_info = spec_field.resolve(value)
    return Field(
        name=descriptor.name,
        label=descriptor.label,
        value=encode_value(value, kind_info),
        type=descriptor.type,
        icon=descriptor.icon,
        status=descriptor.status,
        help=descriptor.help,
    )


def build_section(name: str, section_value: Optional[Any], spec: SectionSpec) -> Section:
    """Build a Section from a section object.

    ``section_value`` may be None (an uninitialized section); its fields are
    then listed with empty values.
    """
    section = Section(title=name, action=name)
    for spec_field in spec.fields:
        value = getattr(section_value, spec_field.attr) if section_value is not None else None
        section.fields.append(build_field(spec_field, value))
    return section


def build_schema(root: Any) -> List[Section]:
    """Enumerate the sections of ``root`` and their fields, in declaration order."""
    root_spec = get_root_spec(type(root))
    sections = []
    for member in root_spec.members:
        value = getattr(root, member.attr)
        if not member.is_section(value):
            continue
        spec = get_section_spec(member.section_type(value))
        sections.append(build_section(member.attr, value, spec))
    return sections
