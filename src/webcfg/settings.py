"""Server settings loaded from environment variables (and a .env file)."""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import find_dotenv, load_dotenv

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


@dataclass(frozen=True)
class Settings:
    """Process-level settings for serving a configuration page.

    These configure the server around the engine, never the edited object.
    """
    host: str = "127.0.0.1"
    port: int = 8080
    log_level: str = "INFO"
    assets_dir: Optional[str] = None

    @classmethod
    def from_env(cls, dotenv: bool = True) -> "Settings":
        """Read WEBCFG_* variables, loading a .env file first unless disabled.

        Raises:
            ValueError: WEBCFG_PORT is not an integer, or validate() fails
        """
        if dotenv:
            load_dotenv(find_dotenv(usecwd=True))
        port_text = os.getenv("WEBCFG_PORT", str(cls.port))
        try:
            port = int(port_text)
        except ValueError:
            raise ValueError(f"WEBCFG_PORT must be an integer, got {port_text!r}") from None
        settings = cls(
            host=os.getenv("WEBCFG_HOST", cls.host),
            port=port,
            log_level=os.getenv("WEBCFG_LOG_LEVEL", cls.log_level).upper(),
            assets_dir=os.getenv("WEBCFG_ASSETS_DIR") or None,
        )
        settings.validate()
        return settings

    def validate(self) -> None:
        if not 0 < self.port < 65536:
            raise ValueError(f"WEBCFG_PORT out of range: {self.port}")
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"WEBCFG_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}")

    def configure_logging(self) -> None:
        logging.basicConfig(
            level=getattr(logging, self.log_level),
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            handlers=[
                logging.StreamHandler(),
            ]
        )
