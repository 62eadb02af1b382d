"""
Example application configuration served as a web form.

Run with:
    python examples/server.py

and open http://127.0.0.1:8080. Host, port, log level and an assets directory
(favicon.ico, icon.png) are read from WEBCFG_* environment variables.
"""

from dataclasses import dataclass, field
from datetime import timedelta
import logging
import re

import uvicorn

from webcfg import ConfigPage, Notification, Theme, Uint, web_field
from webcfg.app import create_app
from webcfg.settings import Settings

logger = logging.getLogger(__name__)

_DURATION_PART = re.compile(r"(\d+(?:\.\d+)?)(ms|h|m|s)")
_UNITS = {"h": "hours", "m": "minutes", "s": "seconds", "ms": "milliseconds"}


class Duration:
    """timedelta with a compact text form such as ``1h30m`` or ``45s``."""

    def __init__(self, delta: timedelta = timedelta()):
        self.delta = delta

    def __eq__(self, other):
        return isinstance(other, Duration) and self.delta == other.delta

    def __repr__(self):
        return f"Duration({self.to_text()})"

    def to_text(self) -> str:
        micros = self.delta // timedelta(microseconds=1)
        hours, rest = divmod(micros, 3_600_000_000)
        minutes, rest = divmod(rest, 60_000_000)
        seconds, fraction = divmod(rest, 1_000_000)
        text = "".join(f"{n}{u}" for n, u in ((hours, "h"), (minutes, "m")) if n)
        if fraction:
            return f"{text}{seconds}.{fraction:06d}".rstrip("0") + "s"
        return f"{text}{seconds}s" if seconds or not text else text

    @classmethod
    def from_text(cls, text: str) -> "Duration":
        text = text.strip()
        if not text or _DURATION_PART.sub("", text):
            raise ValueError(f"invalid duration {text!r}")
        kwargs = {}
        for amount, unit in _DURATION_PART.findall(text):
            kwargs[_UNITS[unit]] = kwargs.get(_UNITS[unit], 0) + float(amount)
        return cls(timedelta(**kwargs))


@dataclass
class DatabaseConfig:
    host: str = web_field("host,Host Name,text,server", default="localhost")
    port: int = web_field("port,Port Number,number,hashtag", default=5432)
    user: str = web_field("user,Username,text,user", default="admin")
    password: str = web_field("password,Password,password,key", default="")

    def updated(self, parent, notifier):
        if not self.password:
            notifier.notify(Notification("Database password is empty", "warning"))


@dataclass
class FeatureConfig:
    enable_feature_a: bool = web_field("enable_a,Enable Feature A,,check-square", default=True)
    enable_feature_b: bool = web_field("enable_b,Enable Feature B,,check-square", default=False)


@dataclass
class AdvancedConfig:
    max_retries: Uint = web_field("retries,Maximum Retries,number,redo", default=3)
    threshold: float = web_field("threshold,Success Threshold,number,chart-line", default=0.95)
    refresh: Duration = web_field(
        "duration,Refresh Interval,text,clock,,Duration such as 5m or 1h30m",
        default_factory=lambda: Duration(timedelta(minutes=5)),
    )


@dataclass
class DescriptionConfig:
    about: str = web_field("about,About this app,textarea,info", default="")


@dataclass
class AppConfig:
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    features: FeatureConfig = field(default_factory=FeatureConfig)
    advanced: AdvancedConfig = field(default_factory=AdvancedConfig)
    theme: Theme = field(default_factory=lambda: Theme(primary="#8e44ad"))
    description: DescriptionConfig = field(default_factory=DescriptionConfig)


def main() -> None:
    settings = Settings.from_env()
    settings.configure_logging()

    cfg = AppConfig()
    cfg.description.about = (
        "This is a simple application to demonstrate webcfg.\n"
        "It supports text, number, checkbox and textarea fields.\n"
        "Try changing some values and clicking 'Submit'."
    )

    # The theme section is live: edits on the page restyle the page
    page = ConfigPage(cfg, assets_dir=settings.assets_dir, theme=cfg.theme)
    app = create_app(page, title="webcfg example")

    logger.info(f"Serving configuration at http://{settings.host}:{settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
