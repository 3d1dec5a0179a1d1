"""
Viewer Configuration

Manages loading from environment variables and default values.
"""

import os
from dataclasses import dataclass, field, asdict

from eval_radar_core.domain.constants import (
    DEFAULT_MODELS,
    FALLBACK_SCALE_MAX,
    FALLBACK_SCALE_MIN,
)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _env_bool(key: str, default: bool) -> bool:
    """Convert an environment variable to bool"""
    val = os.environ.get(key)
    if val is None:
        return default
    return val.lower() in ("true", "1", "yes")


def _env_int(key: str, default: int) -> int:
    """Convert an environment variable to int"""
    val = os.environ.get(key)
    if val is None:
        return default
    try:
        return int(val)
    except ValueError:
        raise ValueError(f"The value '{val}' of environment variable '{key}' cannot be converted to an integer.")


def _env_float(key: str, default: float) -> float:
    """Convert an environment variable to float"""
    val = os.environ.get(key)
    if val is None:
        return default
    try:
        return float(val)
    except ValueError:
        raise ValueError(f"The value '{val}' of environment variable '{key}' cannot be converted to a number.")


def _env_str(key: str, default: str) -> str:
    """Get an environment variable as a string"""
    return os.environ.get(key, default)


def _env_str_list(key: str, default: list[str]) -> list[str]:
    """Convert an environment variable to a comma-separated list of strings"""
    val = os.environ.get(key)
    if val is None:
        return list(default)
    return [x.strip() for x in val.split(",") if x.strip()]


@dataclass
class NormalizationConfig:
    """Normalization configuration"""
    fallback_min: float = FALLBACK_SCALE_MIN  # Display scale when no record has metrics
    fallback_max: float = FALLBACK_SCALE_MAX
    tick_step: float = 0.2

    def __post_init__(self):
        if self.fallback_max <= self.fallback_min:
            raise ValueError(
                f"fallback_max ({self.fallback_max}) must be greater than fallback_min ({self.fallback_min})"
            )
        if not 0 < self.tick_step <= 1:
            raise ValueError(f"tick_step must be in (0, 1]: {self.tick_step}")

    @property
    def fallback(self) -> tuple[float, float]:
        return (self.fallback_min, self.fallback_max)


@dataclass
class DisplayConfig:
    """Chart and table display configuration"""
    preferred_models: list[str] = field(default_factory=lambda: list(DEFAULT_MODELS))
    include_other_models: bool = False  # Also chart models outside preferred_models
    table_height: int = 400


@dataclass
class ViewerConfig:
    """Overall viewer configuration"""
    normalization: NormalizationConfig = field(default_factory=NormalizationConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    log_level: str = "INFO"

    def __post_init__(self):
        self.log_level = self.log_level.upper()
        if self.log_level not in _LOG_LEVELS:
            raise ValueError(f"Invalid log level: {self.log_level}. Valid values: {list(_LOG_LEVELS)}")

    def to_dict(self) -> dict:
        """Convert to dictionary format"""
        return {"viewer_config": asdict(self)}

    @classmethod
    def from_dict(cls, data: dict) -> "ViewerConfig":
        """Create from dictionary (handles presence/absence of viewer_config key)"""
        config_data = data.get("viewer_config", data)
        normalization = NormalizationConfig(**config_data.get("normalization", {}))
        display = DisplayConfig(**config_data.get("display", {}))
        return cls(
            normalization=normalization,
            display=display,
            log_level=config_data.get("log_level", "INFO"),
        )


def load_config() -> ViewerConfig:
    """
    Load configuration from environment variables

    Uses default values when environment variables are not set.

    Returns:
        ViewerConfig
    """
    normalization = NormalizationConfig(
        fallback_min=_env_float("EVAL_RADAR_FALLBACK_MIN", FALLBACK_SCALE_MIN),
        fallback_max=_env_float("EVAL_RADAR_FALLBACK_MAX", FALLBACK_SCALE_MAX),
        tick_step=_env_float("EVAL_RADAR_TICK_STEP", 0.2),
    )
    display = DisplayConfig(
        preferred_models=_env_str_list("EVAL_RADAR_MODELS", DEFAULT_MODELS),
        include_other_models=_env_bool("EVAL_RADAR_INCLUDE_OTHER_MODELS", False),
        table_height=_env_int("EVAL_RADAR_TABLE_HEIGHT", 400),
    )
    return ViewerConfig(
        normalization=normalization,
        display=display,
        log_level=_env_str("EVAL_RADAR_LOG_LEVEL", "INFO"),
    )
