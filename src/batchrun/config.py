from __future__ import annotations

import os
from pathlib import Path
from typing import Literal, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError


class NetworkConfig(BaseModel):
    """Settings for fetching scripts over a raw TCP connection."""

    connect_timeout_seconds: float = Field(
        default=10.0,
        gt=0.0,
        le=600.0,
        description="Timeout applied to connecting and to each read from the script host",
    )
    max_connect_attempts: int = Field(
        default=1,
        ge=1,
        le=20,
        description="How many times to try opening the connection before giving up",
    )
    encoding: str = Field(
        default="utf-8",
        description="Text encoding used to decode fetched scripts",
    )


class AppConfig(BaseModel):
    """Top-level configuration object consumed by the session driver."""

    prompt: str = Field(default="> ", description="Prompt printed before each console read")
    continue_on_spawn_error: bool = Field(
        default=True,
        description="Report a failed spawn and keep going instead of ending the run",
    )
    continue_on_connect_error: bool = Field(
        default=True,
        description="Report a failed script fetch and keep going instead of ending the run",
    )
    unterminated_quote: Literal["error", "rest"] = Field(
        default="error",
        description="'error' rejects a line with an open quote; 'rest' takes the rest of the line as the token",
    )
    network: NetworkConfig = Field(default_factory=NetworkConfig)


def _bool_from_env(value: Optional[str], default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _float_from_env(value: Optional[str], default: float) -> float:
    if value is None:
        return default
    try:
        return float(value)
    except ValueError as exc:
        raise RuntimeError(f"Invalid float value: {value}") from exc


def _int_from_env(value: Optional[str], default: int) -> int:
    if value is None:
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise RuntimeError(f"Invalid integer value: {value}") from exc


def load_config(dotenv_path: str | Path | None = None) -> AppConfig:
    """
    Load configuration from environment variables (optionally seeded by a .env file).

    Parameters
    ----------
    dotenv_path:
        Optional override for the .env file location. Defaults to ``.env`` in the
        working directory.

    Raises
    ------
    RuntimeError
        If a configured value is malformed or out of range.
    """
    env_path = Path(dotenv_path) if dotenv_path else Path(".env")
    if env_path.exists():
        load_dotenv(env_path)

    data = {
        "prompt": os.getenv("BATCHRUN_PROMPT", "> "),
        "continue_on_spawn_error": _bool_from_env(os.getenv("BATCHRUN_CONTINUE_ON_SPAWN_ERROR"), True),
        "continue_on_connect_error": _bool_from_env(
            os.getenv("BATCHRUN_CONTINUE_ON_CONNECT_ERROR"), True
        ),
        "unterminated_quote": os.getenv("BATCHRUN_UNTERMINATED_QUOTE", "error").strip().lower(),
        "network": {
            "connect_timeout_seconds": _float_from_env(os.getenv("BATCHRUN_CONNECT_TIMEOUT"), 10.0),
            "max_connect_attempts": _int_from_env(os.getenv("BATCHRUN_CONNECT_ATTEMPTS"), 1),
            "encoding": os.getenv("BATCHRUN_ENCODING", "utf-8"),
        },
    }

    try:
        return AppConfig.model_validate(data)
    except ValidationError as exc:
        invalid = {"/".join(str(part) for part in err["loc"]) for err in exc.errors()}
        invalid_str = ", ".join(sorted(invalid))
        raise RuntimeError(f"Invalid configuration values: {invalid_str}") from exc
