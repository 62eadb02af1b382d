"""Tests for Initializable / UpdateReceiver hook dispatch."""
import pytest
from dataclasses import dataclass, field

from conftest import InitOrderConfig, InitSuccessConfig, InitSuccessSection
from webcfg import Notification, run_initializers, run_update_hook


class TestRunInitializers:
    """Test run_initializers()."""

    def test_hooks_run(self, notifier):
        cfg = InitSuccessConfig()
        run_initializers(cfg, notifier)
        assert cfg.section.initialized
        assert cfg.service.parent is cfg
        assert notifier.notifications == [Notification("initialized", "info")]

    def test_first_error_stops_walk(self, notifier):
        cfg = InitOrderConfig()
        with pytest.raises(RuntimeError, match="init error"):
            run_initializers(cfg, notifier)
        assert cfg.first.initialized
        assert not cfg.third.initialized

    def test_private_members_skipped(self, notifier):
        @dataclass
        class Config:
            _hidden: InitSuccessSection = field(default_factory=InitSuccessSection)

        cfg = Config()
        run_initializers(cfg, notifier)
        assert not cfg._hidden.initialized

    def test_none_member_skipped(self, notifier):
        @dataclass
        class Config:
            section: InitSuccessSection = None

        run_initializers(Config(), notifier)


class TestRunUpdateHook:
    """Test run_update_hook()."""

    def test_without_hook_is_noop(self, notifier):
        run_update_hook(InitSuccessSection(), object(), notifier)
        assert notifier.notifications == []

    def test_hook_receives_parent_and_notifier(self, notifier):
        seen = []

        @dataclass
        class Section:
            def updated(self, parent, n):
                seen.append((parent, n))

        root = object()
        run_update_hook(Section(), root, notifier)
        assert seen == [(root, notifier)]


class TestHookNamedDataFields:
    """Data fields that share a hook's name are plain fields."""

    def test_initialize_field_is_not_a_hook(self, notifier):
        @dataclass
        class Boot:
            initialize: bool = True

        @dataclass
        class Config:
            boot: Boot = field(default_factory=Boot)

        cfg = Config()
        run_initializers(cfg, notifier)
        assert cfg.boot.initialize is True
        assert notifier.notifications == []

    def test_updated_field_is_not_a_hook(self, notifier):
        @dataclass
        class Meta:
            updated: str = ""

        run_update_hook(Meta(), object(), notifier)
        assert notifier.notifications == []
