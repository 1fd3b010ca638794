"""
Application settings using Pydantic.

Settings are loaded from environment variables with .env file support.
"""

from functools import lru_cache
from pathlib import Path
from typing import List, Literal, Optional
import math

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ruleta.animation.easing import EASING_NAMES
from ruleta.wheel.prizes import DEFAULT_LABELS, parse_labels


class SpinSettings(BaseSettings):
    """Spin timing and deceleration."""

    model_config = SettingsConfigDict(env_prefix="RULETA_SPIN_", extra="ignore")

    # Initial angular speed, degrees per tick
    velocity_min: float = Field(default=10.0, gt=0)
    velocity_max: float = Field(default=20.0, gt=0)

    # Planned spin length
    duration_min_ms: float = Field(default=4000.0, gt=0)
    duration_max_ms: float = Field(default=7000.0, gt=0)

    # Nominal frame step; with fixed_step every frame counts as tick_ms
    tick_ms: float = Field(default=30.0, gt=0)
    fixed_step: bool = True

    easing: str = "ease_out_cubic"

    # Rotation is reduced mod 2*pi at spin start once it grows past this
    rotation_wrap_threshold: float = Field(default=2 * math.pi * 1e6, gt=0)

    @field_validator("easing")
    @classmethod
    def _known_easing(cls, value: str) -> str:
        name = value.lower()
        if name not in EASING_NAMES:
            raise ValueError(f"easing must be one of {', '.join(EASING_NAMES)}")
        return name

    @model_validator(mode="after")
    def _ordered_ranges(self) -> "SpinSettings":
        if self.velocity_min > self.velocity_max:
            raise ValueError("velocity_min must not exceed velocity_max")
        if self.duration_min_ms > self.duration_max_ms:
            raise ValueError("duration_min_ms must not exceed duration_max_ms")
        return self

    @property
    def scheduler_step_ms(self) -> Optional[float]:
        """Fixed step for the frame scheduler, or None for real time."""
        return self.tick_ms if self.fixed_step else None


class WheelSettings(BaseSettings):
    """Wheel canvas and look."""

    model_config = SettingsConfigDict(env_prefix="RULETA_WHEEL_", extra="ignore")

    canvas_size: int = Field(default=640, ge=64)
    font_name: str = "inter,arial,dejavusans"
    celebration_particles: int = Field(default=200, ge=0)


class DisplaySettings(BaseSettings):
    """Simulator window settings."""

    model_config = SettingsConfigDict(env_prefix="RULETA_DISPLAY_", extra="ignore")

    width: int = 1100
    height: int = 720
    fps: int = 60
    fullscreen: bool = False
    title: str = "Ruleta"


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="RULETA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Environment
    env: Literal["simulator", "headless"] = "simulator"
    debug: bool = False

    # Spins performed by a headless run
    spins: int = Field(default=1, ge=1)

    # Options on the wheel: a JSON list in RULETA_LABELS, or a text file
    labels: List[str] = Field(default_factory=lambda: list(DEFAULT_LABELS))
    labels_file: Optional[Path] = None

    # Paths
    screenshot_path: Path = Field(default_factory=lambda: Path.cwd() / "screenshots")

    # Nested settings
    spin: SpinSettings = Field(default_factory=SpinSettings)
    wheel: WheelSettings = Field(default_factory=WheelSettings)
    display: DisplaySettings = Field(default_factory=DisplaySettings)

    @property
    def is_simulator(self) -> bool:
        """Check if running the pygame simulator."""
        return self.env == "simulator"

    @property
    def is_headless(self) -> bool:
        return self.env == "headless"

    def load_labels(self) -> List[str]:
        """Resolve the option labels.

        A labels file wins over the inline list. Blank lines are skipped.
        Validation of the count is left to PrizeSet.
        """
        if self.labels_file is not None:
            return parse_labels(self.labels_file.read_text(encoding="utf-8"))
        return list(self.labels)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
