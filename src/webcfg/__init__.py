"""
Web form editing for nested configuration dataclasses.

webcfg renders an arbitrary configuration dataclass as an HTML form, one form
per section, and writes submissions back into the live object. There is no
per-type boilerplate: display is driven by a comma-separated ``"web"``
annotation on each field and behavior by a few optional hooks.

Quick Start:
    >>> from dataclasses import dataclass, field
    >>> from webcfg import ConfigPage, web_field
    >>> from webcfg.app import create_app
    >>>
    >>> @dataclass
    ... class Database:
    ...     host: str = web_field("host,Host Name,text,server", default="localhost")
    ...     port: int = web_field("port,Port,number", default=5432)
    >>>
    >>> @dataclass
    ... class AppConfig:
    ...     database: Database = field(default_factory=Database)
    >>>
    >>> cfg = AppConfig()
    >>> page = ConfigPage(cfg)
    >>> app = create_app(page)        # serve with uvicorn

Model:
    Root object   a dataclass instance owned by the caller, mutated in place
    Section       a dataclass member of the root; one form, action = name
    Field         an exported member of a section; one form control

Hooks (all optional):
    initialize(parent, notifier)   on root members, at ConfigPage creation
    updated(parent, notifier)      on sections, after a successful submission
    to_text() / from_text(text)    on field types, overriding text conversion

Updates are fail-fast and not transactional; see webcfg.update.

Modules:
    - tags: field annotation parsing
    - kinds: field kinds and fixed-width integer aliases
    - registry: cached per-type introspection
    - codec: value <-> text conversion
    - schema: display schema building
    - lifecycle: hook dispatch
    - update: submission application
    - page: the ConfigPage handle
    - view, theme, app, settings: HTML, CSS, HTTP and process wiring
"""

from webcfg.codec import decode_into, decode_value, encode_value
from webcfg.errors import ParseError, SectionNotFound, WebConfigError
from webcfg.hooks import Initializable, Notification, Notifier, TextCodec, UpdateReceiver
from webcfg.kinds import (
    FieldKind,
    IntRange,
    Int8,
    Int16,
    Int32,
    Int64,
    Uint,
    Uint8,
    Uint16,
    Uint32,
    Uint64,
)
from webcfg.lifecycle import run_initializers, run_update_hook
from webcfg.page import ConfigPage, Page, UpdateResult, new
from webcfg.schema import Field, Section, build_schema
from webcfg.tags import FieldDescriptor, parse_tag, web_field
from webcfg.theme import Theme, theme_css
from webcfg.update import apply_update

__all__ = [
    # Annotation
    'FieldDescriptor',
    'parse_tag',
    'web_field',
    # Kinds
    'FieldKind',
    'IntRange',
    'Int8',
    'Int16',
    'Int32',
    'Int64',
    'Uint',
    'Uint8',
    'Uint16',
    'Uint32',
    'Uint64',
    # Codec
    'encode_value',
    'decode_value',
    'decode_into',
    # Schema
    'Field',
    'Section',
    'build_schema',
    # Hooks
    'Notification',
    'Notifier',
    'Initializable',
    'UpdateReceiver',
    'TextCodec',
    'run_initializers',
    'run_update_hook',
    # Update
    'apply_update',
    # Errors
    'WebConfigError',
    'SectionNotFound',
    'ParseError',
    # Page
    'ConfigPage',
    'Page',
    'UpdateResult',
    'new',
    'Theme',
    'theme_css',
]

__version__ = '1.0.0'
__description__ = 'Web form editing for nested configuration dataclasses'
