"""
Declarative field metadata parsing.

A field's display is controlled by one comma-separated annotation stored in
its dataclass metadata under the ``"web"`` key:

    name,label,type,icon,status,help

Every position is optional and any suffix may be omitted. An empty position
keeps the default. A name of ``-`` excludes the field from both rendering and
update.

Example:
    >>> from dataclasses import dataclass
    >>> from webcfg.tags import web_field
    >>>
    >>> @dataclass
    ... class DatabaseConfig:
    ...     host: str = web_field("host,Host Name,text,server", default="localhost")
    ...     secret: str = web_field("-", default="")
"""

from dataclasses import dataclass, field, Field as DataclassField
from typing import Any

METADATA_KEY = "web"
SKIP_NAME = "-"

DEFAULT_TYPE = "text"
CHECKBOX_TYPE = "checkbox"


@dataclass(frozen=True)
class FieldDescriptor:
    """Display descriptor for one section field, derived from its metadata."""
    name: str
    label: str
    type: str = DEFAULT_TYPE
    icon: str = ""
    status: str = ""
    help: str = ""

    @property
    def skipped(self) -> bool:
        return self.name == SKIP_NAME


def parse_tag(member_name: str, tag: str = "", is_bool: bool = False) -> FieldDescriptor:
    """Parse a field annotation into a FieldDescriptor.

    Never fails: short or malformed annotations degrade to defaults.

    Args:
        member_name: Attribute name of the field (default name and label)
        tag: Comma-separated annotation, possibly empty
        is_bool: Whether the field holds a bool (default type "checkbox")

    Returns:
        FieldDescriptor with overrides applied position by position
    """
    name = member_name
    label = member_name
    field_type = CHECKBOX_TYPE if is_bool else DEFAULT_TYPE
    extras = ["", "", ""]

    if tag:
        parts = tag.split(",")
        if parts[0]:
            # A name override doubles as the label unless position 1 overrides it
            name = label = parts[0]
        if len(parts) > 1 and parts[1]:
            label = parts[1]
        if len(parts) > 2 and parts[2]:
            field_type = parts[2]
        for i, part in enumerate(parts[3:6]):
            if part:
                extras[i] = part

    icon, status, help_text = extras
    return FieldDescriptor(
        name=name,
        label=label,
        type=field_type,
        icon=icon,
        status=status,
        help=help_text,
    )


def field_metadata(dc_field: DataclassField) -> str:
    """Return the raw ``"web"`` annotation of a dataclass field, or ''."""
    tag = dc_field.metadata.get(METADATA_KEY, "")
    return tag if isinstance(tag, str) else ""


def web_field(tag: str, **kwargs: Any) -> Any:
    """dataclasses.field() with a ``"web"`` annotation attached.

    Any existing metadata passed in kwargs is preserved.
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[METADATA_KEY] = tag
    return field(metadata=metadata, **kwargs)
