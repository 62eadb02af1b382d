"""
Per-type field registry.

Introspecting a dataclass (type hints, metadata parsing, kind classification,
capability checks) happens once per type. The resulting specs are cached and
reused by every render and update; only the current values are read live.

Exported members are dataclass fields whose name does not start with an
underscore. Declaration order is preserved everywhere.
"""

from dataclasses import dataclass, fields, is_dataclass
import logging
from typing import Any, Dict, List, Optional, Tuple, get_type_hints

from webcfg.hooks import Initializable, UpdateReceiver
from webcfg.kinds import FieldKind, KindInfo, classify, classify_value, unwrap_annotation
from webcfg.tags import FieldDescriptor, field_metadata, parse_tag

logger = logging.getLogger(__name__)


def is_exported(name: str) -> bool:
    return not name.startswith("_")


def is_dataclass_instance(value: Any) -> bool:
    return is_dataclass(value) and not isinstance(value, type)


@dataclass(frozen=True)
class FieldSpec:
    """Registered leaf field of a section type.

    kind_info is None when the annotation could not be classified statically;
    the kind is then taken from the field's current value.
    """
    attr: str
    tag: str
    kind_info: Optional[KindInfo]

    def resolve(self, value: Any) -> Tuple[FieldDescriptor, KindInfo]:
        """Return the descriptor and kind for the field holding ``value``."""
        kind_info = self.kind_info or classify_value(value)
        descriptor = parse_tag(self.attr, self.tag, is_bool=kind_info.kind is FieldKind.BOOL)
        return descriptor, kind_info

    @property
    def descriptor(self) -> FieldDescriptor:
        """Descriptor computed from the static kind only."""
        is_bool = self.kind_info is not None and self.kind_info.kind is FieldKind.BOOL
        return parse_tag(self.attr, self.tag, is_bool=is_bool)


@dataclass(frozen=True)
class SectionSpec:
    """Registered section type: its exported, non-skipped fields in order."""
    section_type: type
    fields: Tuple[FieldSpec, ...]
    receives_updates: bool


@dataclass(frozen=True)
class MemberSpec:
    """Registered member of a root configuration type."""
    attr: str
    declared_section_type: Optional[type]

    def is_section(self, value: Any) -> bool:
        if is_dataclass_instance(value):
            return True
        return value is None and self.declared_section_type is not None

    def section_type(self, value: Any) -> Optional[type]:
        if is_dataclass_instance(value):
            return type(value)
        return self.declared_section_type


@dataclass(frozen=True)
class RootSpec:
    """Registered root configuration type."""
    root_type: type
    members: Tuple[MemberSpec, ...]

    def member(self, name: str) -> Optional[MemberSpec]:
        return next((m for m in self.members if m.attr == name), None)


_section_specs: Dict[type, SectionSpec] = {}
_root_specs: Dict[type, RootSpec] = {}
_capability_cache: Dict[Tuple[type, type], bool] = {}


def clear_registry() -> None:
    """Drop all cached specs. Needed only when types are redefined at runtime."""
    _section_specs.clear()
    _root_specs.clear()
    _capability_cache.clear()


def _type_hints(cls: type) -> Dict[str, Any]:
    try:
        return get_type_hints(cls, include_extras=True)
    except Exception as e:
        # Forward references to names local to a function cannot be resolved;
        # raw annotations are used and unresolved ones classified at runtime.
        logger.debug(f"Could not resolve type hints for {cls.__name__}: {e}")
        return {f.name: f.type for f in fields(cls)}


def _declared_dataclass(annotation: Any) -> Optional[type]:
    tp, _ = unwrap_annotation(annotation)
    if isinstance(tp, type) and is_dataclass(tp):
        return tp
    return None


def _protocol_members(capability: type) -> List[str]:
    return [name for name in vars(capability) if not name.startswith("_")]


def has_capability(cls: type, capability: type) -> bool:
    """Cached structural check of a class against a capability Protocol."""
    key = (cls, capability)
    if key not in _capability_cache:
        # A data field named like a hook method is not a hook
        _capability_cache[key] = issubclass(cls, capability) and all(
            callable(getattr(cls, name, None)) for name in _protocol_members(capability)
        )
    return _capability_cache[key]


def get_section_spec(section_type: type) -> SectionSpec:
    """Return the SectionSpec of a section dataclass, registering it on first use."""
    spec = _section_specs.get(section_type)
    if spec is not None:
        return spec

    hints = _type_hints(section_type)
    field_specs: List[FieldSpec] = []
    for dc_field in fields(section_type):
        if not is_exported(dc_field.name):
            continue
        annotation = hints.get(dc_field.name, dc_field.type)
        field_spec = FieldSpec(
            attr=dc_field.name,
            tag=field_metadata(dc_field),
            kind_info=classify(annotation),
        )
        if field_spec.descriptor.skipped:
            continue
        field_specs.append(field_spec)

    spec = SectionSpec(
        section_type=section_type,
        fields=tuple(field_specs),
        receives_updates=has_capability(section_type, UpdateReceiver),
    )
    _section_specs[section_type] = spec
    logger.debug(
        f"Registered section type {section_type.__name__} with "
        f"{len(spec.fields)} fields (receives_updates={spec.receives_updates})"
    )
    return spec


def get_root_spec(root_type: type) -> RootSpec:
    """Return the RootSpec of a root configuration type, registering it on first use."""
    spec = _root_specs.get(root_type)
    if spec is not None:
        return spec
    if not is_dataclass(root_type):
        raise TypeError(f"{root_type.__name__} is not a dataclass")

    hints = _type_hints(root_type)
    members = tuple(
        MemberSpec(
            attr=dc_field.name,
            declared_section_type=_declared_dataclass(hints.get(dc_field.name, dc_field.type)),
        )
        for dc_field in fields(root_type)
        if is_exported(dc_field.name)
    )
    spec = RootSpec(root_type=root_type, members=members)
    _root_specs[root_type] = spec
    logger.debug(f"Registered root type {root_type.__name__} with {len(members)} members")
    return spec


def is_initializable(value: Any) -> bool:
    return value is not None and has_capability(type(value), Initializable)
