"""
Runtime configuration for the LMS.

Policy flags switch the enrollment and roster rules that deployments
disagree on.
"""

import json
import os
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError

from .exceptions import ConfigurationError


CONFIG_ENV_VAR = "LMS_CONFIG"


class LMSConfig(BaseModel):
    enforce_unique_teacher: bool = True
    purge_grades_on_student_removal: bool = False
    rollback_orphan_accounts: bool = True
    seed_sample_data: bool = True
    log_level: str = Field("WARNING", pattern=r'^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$')
    max_prompt_attempts: int = Field(3, ge=1, le=100)


def load_config(path: Optional[str] = None, overrides: Optional[Dict[str, Any]] = None) -> LMSConfig:
    """Load configuration from a JSON file.

    ``path`` falls back to the ``LMS_CONFIG`` environment variable; with
    neither set the defaults are used. ``overrides`` win over file values.
    """
    path = path or os.environ.get(CONFIG_ENV_VAR)
    data: Dict[str, Any] = {}
    if path:
        try:
            with open(path, 'r') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Cannot read configuration file {path}: {e}",
                                     error_code="config_unreadable") from e
        if not isinstance(data, dict):
            raise ConfigurationError("Configuration file must contain a JSON object",
                                     error_code="config_not_object")
    if overrides:
        data.update(overrides)
    try:
        return LMSConfig(**data)
    except PydanticValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}", error_code="config_invalid",
                                 details={'errors': e.errors()}) from e
