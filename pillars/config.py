"""pillars configuration.

Typed settings for the CLI.  Values come from defaults, then ``PILLARS_*``
environment variables, then command-line flags.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Config(BaseModel):
    """Global pillars configuration.

    Created once by the CLI entry point and handed to the initializer and
    generator.
    """

    project_dir: Path = Field(
        default=Path("."), description="Existing project that ``add`` writes into"
    )
    output_dir: Path = Field(
        default=Path("."), description="Parent directory that ``create`` writes into"
    )
    install_timeout: int = Field(
        default=600, ge=30, description="Package manager timeout in seconds"
    )
    log_level: str = Field(default="WARNING")

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        upper = value.upper()
        if upper not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return upper

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            PILLARS_PROJECT_DIR, PILLARS_OUTPUT_DIR, PILLARS_INSTALL_TIMEOUT,
            PILLARS_LOG_LEVEL.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("PILLARS_PROJECT_DIR"):
            kwargs["project_dir"] = Path(os.environ["PILLARS_PROJECT_DIR"])
        if os.environ.get("PILLARS_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["PILLARS_OUTPUT_DIR"])
        if os.environ.get("PILLARS_INSTALL_TIMEOUT"):
            kwargs["install_timeout"] = int(os.environ["PILLARS_INSTALL_TIMEOUT"])
        if os.environ.get("PILLARS_LOG_LEVEL"):
            kwargs["log_level"] = os.environ["PILLARS_LOG_LEVEL"]
        return cls(**kwargs)
