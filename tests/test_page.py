"""Tests for the ConfigPage handle."""
import pytest
from dataclasses import dataclass, field

from conftest import InitOrderConfig, InitSuccessConfig
from webcfg import ConfigPage, Notification, SectionNotFound, Theme, new
from webcfg.page import SUCCESS_MESSAGE


class TestConstruction:
    """Test ConfigPage creation."""

    def test_initializers_run_with_page_as_notifier(self):
        cfg = InitSuccessConfig()
        page = ConfigPage(cfg)
        assert cfg.section.initialized
        assert page.notifications == [Notification("initialized", "info")]

    def test_initializer_error_aborts_construction(self):
        cfg = InitOrderConfig()
        with pytest.raises(RuntimeError, match="init error"):
            ConfigPage(cfg)
        assert cfg.first.initialized

    def test_options(self, config, tmp_path):
        theme = Theme(primary="#123456")
        page = new(config, assets=tmp_path, theme=theme)
        assert page.assets_dir == tmp_path
        assert page.theme is theme
        assert page.config is config

    def test_root_not_copied(self, config):
        page = ConfigPage(config)
        page.update("section1", {"string_field": "x"})
        assert config.section1.string_field == "x"


class TestBuildPage:
    """Test ConfigPage.build_page()."""

    def test_page_contents(self, config, tmp_path):
        page = ConfigPage(config, assets_dir=tmp_path)
        built = page.build_page()
        assert built.title == "TestConfig"
        assert [s.title for s in built.sections] == ["section1", "section2"]
        assert built.has_assets
        assert not built.has_theme

    def test_notifications_cleared_after_take(self, config):
        page = ConfigPage(config)
        page.notify(Notification("hello", "info"))
        assert page.build_page().notifications == [Notification("hello", "info")]
        assert page.take_notifications() == [Notification("hello", "info")]
        assert page.build_page().notifications == []


class TestUpdate:
    """Test ConfigPage.update() results and notifications."""

    def test_success(self, config):
        page = ConfigPage(config)
        result = page.update("section1", {"int_field": "3"})
        assert result.ok
        assert result.notification == Notification(SUCCESS_MESSAGE, "success")
        assert page.notifications == [result.notification]

    def test_parse_error(self, config):
        page = ConfigPage(config)
        result = page.update("section1", {"int_field": "abc"})
        assert not result.ok
        assert result.notification.status == "danger"
        assert result.notification.message.startswith("Update failed: invalid integer field int_field: ")

    def test_section_not_found(self, config):
        page = ConfigPage(config)
        result = page.update("missing", {})
        assert isinstance(result.error, SectionNotFound)
        assert result.notification.message == "Update failed: section missing not found"

    def test_hook_notifications_precede_result(self):
        @dataclass
        class Section:
            value: int = 0

            def updated(self, parent, notifier):
                notifier.notify(Notification("from hook", "warning"))

        @dataclass
        class Root:
            section: Section = field(default_factory=Section)

        page = ConfigPage(Root())
        page.update("section", {"value": "1"})
        assert [n.message for n in page.notifications] == ["from hook", SUCCESS_MESSAGE]
