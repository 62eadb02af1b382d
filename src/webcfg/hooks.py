"""
Capability hooks a configuration object may optionally implement.

The engine never requires any of these. Presence is detected structurally
(runtime_checkable Protocols) once per type when the type is registered.

- Initializable: called once per root member when the page is constructed
- UpdateReceiver: called once per section after a successful submission
- TextCodec: per-field override of the built-in text conversion
"""

from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable


@dataclass(frozen=True)
class Notification:
    """A user-visible message queued for the next render."""
    message: str
    status: str = "info"


@runtime_checkable
class Notifier(Protocol):
    def notify(self, notification: Notification) -> None:
        ...


@runtime_checkable
class Initializable(Protocol):
    """Root member that wants a one-time setup call.

    Raising aborts page construction.
    """

    def initialize(self, parent: Any, notifier: Notifier) -> None:
        ...


@runtime_checkable
class UpdateReceiver(Protocol):
    """Section that wants to react after its fields were written.

    Raising makes the update fail; fields already written stay written.
    """

    def updated(self, parent: Any, notifier: Notifier) -> None:
        ...


@runtime_checkable
class TextCodec(Protocol):
    """Value type with its own text form.

    ``from_text`` is expected to be a classmethod returning a new instance,
    and to raise when the text cannot be represented.
    """

    def to_text(self) -> str:
        ...

    @classmethod
    def from_text(cls, text: str) -> Any:
        ...
