# ─────────────────────────────────────────────────────────────────────
# Petri-CCS Core — Configuration Schema
# © 1998–2026 Miroslav Šotek. All rights reserved.
# ─────────────────────────────────────────────────────────────────────
"""
Strict schema validation for translator configurations using Pydantic.
Rejects malformed seeds, formats and log levels before any net is read.
"""

import json
from pathlib import Path
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


class LoggingParams(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: str = "INFO"
    json_output: bool = False
    log_file: Optional[str] = None

    @field_validator("level")
    @classmethod
    def check_level(cls, v: str):
        level = v.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"level must be one of {', '.join(_LOG_LEVELS)}")
        return level


class TranslatorConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    seed: Optional[int] = Field(default=None, ge=0)
    output_format: Literal["text", "html"] = "text"
    synchronise_group_choice: bool = True
    logging: LoggingParams = Field(default_factory=LoggingParams)


def validate_config(config_dict: dict) -> TranslatorConfig:
    """Validate a raw configuration dictionary and return a TranslatorConfig."""
    return TranslatorConfig.model_validate(config_dict)


def load_config(path: Union[str, Path]) -> TranslatorConfig:
    """Read and validate a JSON configuration file."""
    with open(path, encoding="utf-8") as f:
        return validate_config(json.load(f))
