"""Configuration management for the axsnap traversal and diff toolkit."""

import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables
load_dotenv()


class Config(BaseSettings):
    """Configuration class for axsnap.

    Every field can be overridden with an ``AXSNAP_``-prefixed environment
    variable, e.g. ``AXSNAP_MAX_DEPTH=40``.
    """

    model_config = SettingsConfigDict(
        env_prefix="AXSNAP_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",  # Ignore unexpected env vars rather than raising errors
    )

    # Traversal Configuration
    max_depth: int = Field(default=100, description="Depth ceiling for the element tree walk")
    only_visible_elements: bool = Field(default=False, description="Collect only elements with valid geometry")

    # Diff Configuration
    position_tolerance: float = Field(default=5.0, description="Max point distance for fine-diff matching")
    attribute_tolerance: float = Field(default=0.01, description="Numeric noise ignored when comparing attributes")

    # Orchestration
    delay_after_action: float = Field(default=0.2, description="Seconds to wait before the post-action traversal")

    # Framework Configuration
    log_level: str = Field(default="INFO")
    log_to_file: bool = Field(default=False)
    log_dir: str = Field(default="logs")

    def validate_config(self) -> bool:
        """Validate configuration values."""
        if self.max_depth <= 0:
            raise ValueError("Max depth must be positive")

        if self.position_tolerance < 0:
            raise ValueError("Position tolerance must not be negative")

        if self.attribute_tolerance < 0:
            raise ValueError("Attribute tolerance must not be negative")

        if self.delay_after_action < 0:
            raise ValueError("Delay after action must not be negative")

        return True

    def get_log_path(self, filename: Optional[str] = None) -> str:
        """Get the full path to the log directory, or to a file inside it."""
        log_path = os.path.join(os.getcwd(), self.log_dir)
        if filename:
            return os.path.join(log_path, filename)
        return log_path


# Global configuration instance
config = Config()
