"""Exceptions raised by the webcfg engine."""

from typing import Optional, Type, TypeVar, Union

E = TypeVar("E", bound=BaseException)


class WebConfigError(Exception):
    """Base class for errors raised by webcfg itself."""


class SectionNotFound(WebConfigError, LookupError):
    """The submitted section is not a dataclass member of the root object."""

    def __init__(self, section: str):
        super().__init__(f"section {section} not found")
        self.section = section


class ParseError(WebConfigError, ValueError):
    """A single field's submitted text could not be decoded.

    Attributes:
        message: Short tag, e.g. "invalid integer" or "failed to unmarshal"
        field: Form name of the offending field
        cause: The underlying exception (also chained as __cause__)
    """

    def __init__(self, message: str, field: str = "", cause: Optional[BaseException] = None):
        super().__init__(message, field, cause)
        self.message = message
        self.field = field
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return f"{self.message} field {self.field}: {self.cause}"

    def _chain(self):
        err = self.cause
        seen = set()
        while err is not None and id(err) not in seen:
            seen.add(id(err))
            yield err
            err = err.__cause__

    def is_cause(self, target: Union[BaseException, Type[BaseException]]) -> bool:
        """Check whether ``target`` appears in the cause chain.

        ``target`` may be an exception instance (matched by identity or
        equality) or an exception class (matched with isinstance).
        """
        for err in self._chain():
            if isinstance(target, type):
                if isinstance(err, target):
                    return True
            elif err is target or err == target:
                return True
        return False

    def find_cause(self, exc_type: Type[E]) -> Optional[E]:
        """Return the first exception in the cause chain of type ``exc_type``."""
        return next((err for err in self._chain() if isinstance(err, exc_type)), None)
