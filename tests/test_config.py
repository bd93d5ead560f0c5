"""
Settings tests
Environment driven engine settings
"""
import pytest
from pydantic import ValidationError

from core.config import EngineSettings, get_settings


class TestEngineSettings:
    """DOUGH_* environment variables"""

    def test_defaults(self, monkeypatch):
        for name in ("DOUGH_FRICTION_RISE", "DOUGH_SOLVER_TOLERANCE", "DOUGH_SOLVER_MAX_ITERATIONS"):
            monkeypatch.delenv(name, raising=False)
        settings = get_settings()
        assert settings.friction_rise == 1.
        assert settings.solver_tolerance == 1e-7
        assert settings.solver_max_iterations == 100

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("DOUGH_FRICTION_RISE", "2.5")
        monkeypatch.setenv("DOUGH_SOLVER_MAX_ITERATIONS", "60")
        settings = EngineSettings.from_env()
        assert settings.friction_rise == 2.5
        assert settings.solver_max_iterations == 60

    def test_negative_friction_rejected(self, monkeypatch):
        monkeypatch.setenv("DOUGH_FRICTION_RISE", "-1")
        with pytest.raises(ValidationError):
            get_settings()
