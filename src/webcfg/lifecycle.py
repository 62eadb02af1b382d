"""
Dispatch of the optional Initializable and UpdateReceiver hooks.

Hooks receive the root object and a Notifier. They run synchronously and
their exceptions propagate unchanged to the caller.
"""

from typing import Any

from webcfg.hooks import Notifier
from webcfg.registry import get_root_spec, get_section_spec, is_initializable


def run_initializers(root: Any, notifier: Notifier) -> None:
    """Call ``initialize(root, notifier)`` on every root member that has it.

    Members are visited in declaration order. The first exception stops the
    walk; hooks that already ran keep their effects.
    """
    for member in get_root_spec(type(root)).members:
        value = getattr(root, member.attr)
        if is_initializable(value):
            value.initialize(root, notifier)


def run_update_hook(section: Any, root: Any, notifier: Notifier) -> None:
    """Call ``updated(root, notifier)`` once if the section type receives updates."""
    if get_section_spec(type(section)).receives_updates:
        section.updated(root, notifier)
