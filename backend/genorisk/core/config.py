"""
Configuration for the genorisk service.
Centralizes upload limits and the explanation gateway settings.
"""

import os
from typing import Optional, Tuple

from dotenv import load_dotenv, find_dotenv
from pydantic import BaseModel, Field

# Load .env file (walks up directories to find it)
load_dotenv(find_dotenv())


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


class UploadConfig(BaseModel):
    """Structural gate checks applied before a VCF is parsed."""

    max_file_size_bytes: int = Field(
        default_factory=lambda: _env_int("GENORISK_MAX_UPLOAD_BYTES", 5 * 1024 * 1024),
        gt=0,
        description="Maximum accepted upload size in bytes (5 MB)"
    )

    allowed_extensions: Tuple[str, ...] = Field(
        default=(".vcf",),
        description="Lower-case filename suffixes accepted for upload"
    )


class ExplanationConfig(BaseModel):
    """Settings for the external narrative-explanation gateway."""

    api_url: str = Field(
        default_factory=lambda: os.environ.get(
            "GENORISK_LLM_API_URL", "https://ai.gateway.lovable.dev/v1/chat/completions"
        ),
        description="OpenAI-compatible chat completions endpoint"
    )

    api_key: Optional[str] = Field(
        default_factory=lambda: os.environ.get("GENORISK_LLM_API_KEY") or None,
        description="Bearer token; when unset every explanation uses the local fallback"
    )

    model: str = Field(
        default_factory=lambda: os.environ.get("GENORISK_LLM_MODEL", "openai/gpt-5-nano"),
        description="Model identifier sent to the gateway"
    )

    timeout_seconds: float = Field(
        default_factory=lambda: _env_float("GENORISK_LLM_TIMEOUT", 30.0),
        gt=0.0,
        description="Overall budget for one batch explanation request"
    )

    max_tries: int = Field(
        default=2,
        ge=1,
        description="Attempts per request (2 = retry once) on transport errors and 5xx"
    )


class GenoriskConfig(BaseModel):
    """Main configuration for the genorisk service."""

    upload: UploadConfig = Field(
        default_factory=UploadConfig,
        description="Upload gate configuration"
    )

    explanation: ExplanationConfig = Field(
        default_factory=ExplanationConfig,
        description="Explanation gateway configuration"
    )

    log_level: str = Field(
        default_factory=lambda: os.environ.get("GENORISK_LOG_LEVEL", "INFO"),
        description="Root log level for the service"
    )


# Global configuration instance
_config: GenoriskConfig = GenoriskConfig()


def get_config() -> GenoriskConfig:
    """Get the global configuration instance."""
    return _config


def update_config(**kwargs) -> GenoriskConfig:
    """Update configuration parameters."""
    global _config
    current_dict = _config.model_dump()

    for key, value in kwargs.items():
        if '.' in key:
            # Nested keys like 'explanation.timeout_seconds'
            parts = key.split('.')
            current = current_dict
            for part in parts[:-1]:
                current = current[part]
            current[parts[-1]] = value
        else:
            current_dict[key] = value

    _config = GenoriskConfig(**current_dict)
    return _config


def reset_config() -> GenoriskConfig:
    """Rebuild the configuration from defaults and the environment."""
    global _config
    _config = GenoriskConfig()
    return _config


def load_config_from_file(filepath: str) -> GenoriskConfig:
    """Load configuration from a JSON file."""
    global _config

    with open(filepath, 'r') as f:
        _config = GenoriskConfig.model_validate_json(f.read())
    return _config


def save_config_to_file(filepath: str):
    """Save current configuration to a JSON file."""
    with open(filepath, 'w') as f:
        f.write(_config.model_dump_json(indent=2))


# Convenience accessors
def get_upload_config() -> UploadConfig:
    return _config.upload


def get_explanation_config() -> ExplanationConfig:
    return _config.explanation
