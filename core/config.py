"""
Engine Settings
Tunable constants read from the environment (.env is loaded for local profiles)
"""
import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field


profile = os.getenv("PROFILE", "")
if profile in ("", "local"):
    load_dotenv()


class EngineSettings(BaseModel):
    """
    Settings shared by the ingredient ledger and the yeast solver

    friction_rise: temperature rise caused by kneading friction [°C]
    solver_tolerance: width of the yeast dose bracket at which bisection stops
    solver_max_iterations: bisection iteration cap
    """
    friction_rise: float = Field(default=1.0, ge=0.)
    solver_tolerance: float = Field(default=1e-7, gt=0.)
    solver_max_iterations: int = Field(default=100, gt=0)

    @classmethod
    def from_env(cls) -> "EngineSettings":
        """
        Build settings from DOUGH_* environment variables

        Returns:
            EngineSettings
        """
        return cls(
            friction_rise=float(os.getenv("DOUGH_FRICTION_RISE", "1.0")),
            solver_tolerance=float(os.getenv("DOUGH_SOLVER_TOLERANCE", "1e-7")),
            solver_max_iterations=int(os.getenv("DOUGH_SOLVER_MAX_ITERATIONS", "100")),
        )


def get_settings() -> EngineSettings:
    """Current settings, re-read on each call so tests can patch the environment"""
    return EngineSettings.from_env()
