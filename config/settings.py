"""Configuration helpers for the Base64 Playground project."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional


@dataclass(slots=True)
class AppConfig:
    """Centralized application configuration."""

    storage_dir: Path = Path("data")
    storage_key: str = "base64_playground"
    max_history_items: int = 10
    history_truncate_length: int = 80
    copy_feedback_seconds: float = 1.5
    history_feedback_seconds: float = 2.0
    error_display_seconds: float = 3.0
    feedback_tick_seconds: float = 0.5
    log_dir: Path = Path("logs")
    log_level: str = "INFO"
    server_name: str = "127.0.0.1"
    server_port: int = 7860
    metadata: dict[str, Any] = field(default_factory=dict)


def _load_env_file(path: Path) -> None:
    """Populate environment variables from a simple KEY=VALUE .env file."""
    if not path.exists():
        return

    for line in path.read_text(encoding="utf-8").splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#") or "=" not in stripped:
            continue
        key, value = stripped.split("=", 1)
        os.environ[key.strip()] = value.strip()


def _env_int(name: str, default: int, minimum: int = 1) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value >= minimum else default


def load_config(config_path: Optional[str] = None) -> AppConfig:
    """Return an AppConfig instance with environment-aware settings."""
    env_path = Path(config_path) if config_path else Path(".env")
    _load_env_file(env_path)

    defaults = AppConfig()
    storage_dir = Path(os.getenv("PLAYGROUND_STORAGE_DIR", str(defaults.storage_dir))).expanduser()
    log_dir = Path(os.getenv("LOG_DIR", str(defaults.log_dir))).expanduser()

    metadata: dict[str, Any] = {}
    if env_path.exists():
        metadata["env_file"] = str(env_path)

    return AppConfig(
        storage_dir=storage_dir,
        storage_key=os.getenv("PLAYGROUND_STORAGE_KEY") or defaults.storage_key,
        max_history_items=_env_int("PLAYGROUND_MAX_HISTORY", defaults.max_history_items),
        history_truncate_length=_env_int(
            "PLAYGROUND_TRUNCATE_LENGTH", defaults.history_truncate_length
        ),
        log_dir=log_dir,
        log_level=(os.getenv("LOG_LEVEL") or defaults.log_level).upper(),
        server_name=os.getenv("SERVER_NAME") or defaults.server_name,
        server_port=_env_int("SERVER_PORT", defaults.server_port),
        metadata=metadata,
    )
