"""Unit tests for operator settings."""

from addonhub.types import settings
from addonhub.types.settings import Settings


class TestSettings:
    def test_defaults(self):
        conf = Settings()
        assert conf.reconcile_workers == settings.RECONCILE_WORKERS
        assert conf.addon_names == settings.ADDON_NAMES

    def test_overrides(self):
        conf = Settings(reconcile_workers=8, addon_names=["a", "b"], metrics_enabled=False)
        assert conf.reconcile_workers == 8
        assert conf.addon_names == frozenset({"a", "b"})
        assert conf.metrics_enabled is False

    def test_getenv_list(self, monkeypatch):
        monkeypatch.setenv("ADDON_NAMES_TEST", " a, b ,,c ")
        assert settings._getenv_list("ADDON_NAMES_TEST") == frozenset({"a", "b", "c"})

    def test_getenv_booleans(self, monkeypatch):
        monkeypatch.setenv("FLAG_TEST", "false")
        assert settings._getenv("FLAG_TEST", True) is False
        monkeypatch.delenv("FLAG_TEST")
        assert settings._getenv("FLAG_TEST", True) is True
