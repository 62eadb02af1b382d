"""
ConfigPage: the handle tying one configuration object to its web form.

Lifecycle:
- Created once per root object; construction runs the Initializable hooks
  with the page as notifier and fails if any of them raises
- build_page() derives a fresh Page (sections, queued notifications) for
  each render; take_notifications() empties the queue afterwards
- update() applies one section submission and queues the outcome as a
  notification

The page holds no configuration state of its own besides the notification
queue. update_lock serializes submissions for servers that handle requests
concurrently; apply_update itself is single-writer.
"""

from dataclasses import dataclass, field
import logging
from pathlib import Path
import threading
from typing import Any, List, Mapping, Optional, Union

from webcfg.hooks import Notification
from webcfg.lifecycle import run_initializers
from webcfg.schema import Section, build_schema
from webcfg.theme import Theme
from webcfg.update import apply_update

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Section updated successfully"
FAILURE_PREFIX = "Update failed: "


@dataclass
class Page:
    """Everything the view needs to render the index."""
    title: str
    subtitle: str = ""
    notifications: List[Notification] = field(default_factory=list)
    sections: List[Section] = field(default_factory=list)
    has_assets: bool = False
    has_theme: bool = False


@dataclass(frozen=True)
class UpdateResult:
    """Outcome of ConfigPage.update(); error is None on success."""
    notification: Notification
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ConfigPage:
    """Web form handle for one configuration dataclass instance."""

    def __init__(
        self,
        config: Any,
        assets_dir: Optional[Union[str, Path]] = None,
        theme: Optional[Theme] = None,
    ):
        """
        Args:
            config: Root configuration dataclass instance, mutated in place
            assets_dir: Directory providing favicon.ico and icon.png
            theme: Palette served as /assets/css/custom.css

        Raises:
            Exception: Whatever the first failing ``initialize`` hook raised
        """
        self.config = config
        self.assets_dir = Path(assets_dir) if assets_dir is not None else None
        self.theme = theme
        self.update_lock = threading.Lock()
        self._notifications: List[Notification] = []

        run_initializers(config, self)
        logger.debug(f"ConfigPage created for {type(config).__name__}")

    @property
    def notifications(self) -> List[Notification]:
        return list(self._notifications)

    def notify(self, notification: Notification) -> None:
        self._notifications.append(notification)

    def take_notifications(self) -> List[Notification]:
        """Return and clear the queued notifications."""
        queued, self._notifications = self._notifications, []
        return queued

    def build_page(self) -> Page:
        return Page(
            title=type(self.config).__name__,
            notifications=self.notifications,
            sections=build_schema(self.config),
            has_assets=self.assets_dir is not None,
            has_theme=self.theme is not None,
        )

    def update(self, section_name: str, values: Mapping[str, str]) -> UpdateResult:
        """Apply a submission and queue a success or failure notification.

        The update may be partially applied when it fails (see webcfg.update).
        """
        with self.update_lock:
            try:
                apply_update(self.config, section_name, values, self)
            except Exception as e:
                notification = Notification(f"{FAILURE_PREFIX}{e}", "danger")
                self.notify(notification)
                return UpdateResult(notification, e)
        notification = Notification(SUCCESS_MESSAGE, "success")
        self.notify(notification)
        return UpdateResult(notification)


def new(config: Any, *, assets: Optional[Union[str, Path]] = None, theme: Optional[Theme] = None) -> ConfigPage:
    """Construct a ConfigPage; shorthand used by applications."""
    return ConfigPage(config, assets_dir=assets, theme=theme)
