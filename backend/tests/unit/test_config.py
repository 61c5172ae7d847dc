"""
Unit tests for application configuration.
"""

from core.config import Settings, get_settings


class TestSettings:
    """Tests for Settings loading."""

    def test_defaults(self, monkeypatch):
        """Test default snapping configuration."""
        for name in (
            "SNAP_THRESHOLD_M",
            "MAX_SNAP_THRESHOLD_M",
            "MAX_FEATURES_PER_REQUEST",
            "LOG_LEVEL",
        ):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.snap_threshold_m == 10.0
        assert settings.max_snap_threshold_m == 100.0
        assert settings.max_features_per_request == 5000
        assert settings.log_level == "INFO"

    def test_reads_environment(self, monkeypatch):
        """Test that environment variables override defaults."""
        monkeypatch.setenv("SNAP_THRESHOLD_M", "5.5")
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")

        settings = Settings(_env_file=None)

        assert settings.snap_threshold_m == 5.5
        assert settings.log_level == "DEBUG"

    def test_get_settings_is_cached(self):
        """Test that get_settings returns the same instance."""
        assert get_settings() is get_settings()
