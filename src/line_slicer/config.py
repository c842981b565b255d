"""Configuration management for the application."""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

BUFFER_MODES = ("bounded", "full")


@dataclass
class AppConfig:
    """Application configuration parameters."""

    buffer_mode: str = "bounded"
    log_level: str = "WARNING"

    def __post_init__(self):
        """Validate configuration after initialization."""
        if self.buffer_mode not in BUFFER_MODES:
            raise ValueError(
                f"Unknown buffer mode: {self.buffer_mode}. "
                f"Valid options: {', '.join(BUFFER_MODES)}"
            )

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Load application configuration from environment variables.

        - LINE_SLICER_BUFFER_MODE: ``bounded`` keeps memory proportional to the
          negative bounds, ``full`` buffers the input for any negative bound
        - LINE_SLICER_LOG_LEVEL: logging level name for stderr diagnostics
        """
        return cls(
            buffer_mode=os.getenv("LINE_SLICER_BUFFER_MODE", "bounded").lower(),
            log_level=os.getenv("LINE_SLICER_LOG_LEVEL", "WARNING").upper(),
        )


def get_app_config() -> AppConfig:
    """Get application configuration."""
    return AppConfig.from_env()
