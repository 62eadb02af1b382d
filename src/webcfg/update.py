"""
Application of a form submission to one section.

The update is fail-fast and not transactional: fields are decoded directly
into the live section in declaration order and the first ParseError stops the
loop. Fields before it stay written, fields after it are untouched, and an
exception from the section's ``updated`` hook leaves every field written.
Callers that need atomicity snapshot and restore the object themselves.

Nothing here is synchronized. The root object is shared mutable state, so
concurrent submissions must be serialized by the caller (ConfigPage holds a
lock for that purpose).
"""

from typing import Any, Mapping

from webcfg.codec import decode_into
from webcfg.errors import SectionNotFound
from webcfg.hooks import Notifier
from webcfg.lifecycle import run_update_hook
from webcfg.registry import get_root_spec, get_section_spec, is_dataclass_instance


def resolve_section(root: Any, section_name: str) -> Any:
    """Return the live section object called ``section_name``.

    Raises:
        SectionNotFound: No exported member of that name holds a dataclass
    """
    member = get_root_spec(type(root)).member(section_name)
    if member is None:
        raise SectionNotFound(section_name)
    section = getattr(root, member.attr)
    if not is_dataclass_instance(section):
        raise SectionNotFound(section_name)
    return section


def apply_update(root: Any, section_name: str, values: Mapping[str, str], notifier: Notifier) -> None:
    """Write submitted ``values`` into the section ``section_name`` of ``root``.

    Args:
        root: Root configuration dataclass instance
        section_name: Attribute name of the section
        values: Form name -> submitted text; missing names count as ''
        notifier: Passed to the section's ``updated`` hook

    Raises:
        SectionNotFound: Unknown section; nothing was modified
        ParseError: A field failed to decode; earlier fields were written
        Exception: Whatever the ``updated`` hook raised
    """
    section = resolve_section(root, section_name)
    for spec_field in get_section_spec(type(section)).fields:
        current = getattr(section, spec_field.attr)
        descriptor, kind_info = spec_field.resolve(current)
        decode_into(section, spec_field.attr, values.get(descriptor.name, ""), kind_info, descriptor.name)
    run_update_hook(section, root, notifier)
