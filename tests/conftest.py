"""Pytest configuration and shared fixtures."""
import pytest
from dataclasses import dataclass, field
from typing import List

from webcfg import Notification, Uint, Uint8, Int8, web_field
from webcfg.registry import clear_registry


class Token:
    """Custom-codec value used across tests."""

    def __init__(self, value: str = ""):
        self.value = value

    def __eq__(self, other):
        return isinstance(other, Token) and self.value == other.value

    def __repr__(self):
        return f"Token({self.value!r})"

    def to_text(self) -> str:
        if self.value == "marshal_error":
            raise RuntimeError("marshal error")
        return self.value

    @classmethod
    def from_text(cls, text: str) -> "Token":
        if text == "error":
            raise TokenError("unmarshal error")
        return cls(text)


class TokenError(Exception):
    """Domain error raised by Token.from_text."""


@dataclass
class BasicSection:
    string_field: str = web_field("string_field,String Field,text,icon,status,help", default="")
    bool_field: bool = web_field(",,,,", default=False)
    int_field: int = web_field("", default=0)
    uint_field: Uint = web_field("uint_field", default=0)
    float_field: float = web_field("float_field", default=0.0)
    custom_field: Token = web_field("custom_field", default_factory=Token)
    ignored_field: str = web_field("-", default="keep")
    _unexported: str = "hidden"


@dataclass
class WidthSection:
    int8_field: Int8 = 0
    uint8_field: Uint8 = 0
    plain: int = 0


@dataclass
class HiddenSection:
    field_a: str = ""


@dataclass
class TestConfig:
    """Root config with two sections, a plain member and a private section."""
    section1: BasicSection = field(default_factory=BasicSection)
    section2: WidthSection = field(default_factory=WidthSection)
    title: str = "not a section"
    _private: HiddenSection = field(default_factory=HiddenSection)


@dataclass
class InitSuccessSection:
    initialized: bool = False

    def initialize(self, parent, notifier):
        self.initialized = True
        notifier.notify(Notification("initialized", "info"))


@dataclass
class InitErrSection:
    field_a: str = ""

    def initialize(self, parent, notifier):
        raise RuntimeError("init error")


class Service:
    """Non-dataclass root member with a hook."""

    def __init__(self):
        self.parent = None

    def initialize(self, parent, notifier):
        self.parent = parent


@dataclass
class InitSuccessConfig:
    section: InitSuccessSection = field(default_factory=InitSuccessSection)
    service: Service = field(default_factory=Service)
    plain: int = 3


@dataclass
class InitOrderConfig:
    first: InitSuccessSection = field(default_factory=InitSuccessSection)
    second: InitErrSection = field(default_factory=InitErrSection)
    third: InitSuccessSection = field(default_factory=InitSuccessSection)


class RecordingNotifier:
    def __init__(self):
        self.notifications: List[Notification] = []

    def notify(self, notification: Notification) -> None:
        self.notifications.append(notification)


@pytest.fixture(autouse=True)
def reset_registry():
    """Start every test with an empty type registry."""
    clear_registry()
    yield
    clear_registry()


@pytest.fixture
def config():
    """Provide a fresh test configuration."""
    return TestConfig()


@pytest.fixture
def notifier():
    """Provide a notifier that records what hooks send."""
    return RecordingNotifier()
