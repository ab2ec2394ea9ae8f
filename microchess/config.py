"""
Environment-driven configuration.

A .env file in the working directory is loaded first; variables already set
in the process environment win.

Environment Variables:
    MICROCHESS_OUTPUT_FILE: Game log path - default: ./randomchess.json
    MICROCHESS_LOG_FILE: Log file path - default: ./microchess.log
    MICROCHESS_MAX_SIZE_BYTES: Store byte budget - default: 1048576
    MICROCHESS_GENERATOR_INTERVAL: Generation interval (ms) - default: 3600000
    MICROCHESS_MAX_MOVES: Max plies per game - default: 100
    MICROCHESS_MAX_WRITE_RETRIES: Persist attempts - default: 3
    MICROCHESS_LOG_LEVEL: debug, info, warning, error - default: info
    MICROCHESS_LOG_FORMAT: text, json - default: text
    MICROCHESS_RUN_ONCE: Run one generation and exit - default: false
    MICROCHESS_USE_SEEDRANDOM / MICROCHESS_PREFER_EXTERNAL_RNG: Prefer numpy RNG - default: false
    MICROCHESS_SEED: Fixed seed for every run - default: fresh seed per run
    MICROCHESS_DRAIN_TIMEOUT: Shutdown wait for an in-flight run (s) - default: 5
    MICROCHESS_REPLAY_BASE_DIR: Directory replay may read from - default: output file directory
    MICROCHESS_INTERVAL: Upload interval (ms) - default: 3600000
    JSONBIN_ACCESS_KEY: Upload access key - required by the uploader
    JSONBIN_URL: Upload endpoint - default: https://api.jsonbin.io/v3/b
    JSONBIN_TIMEOUT: Upload request timeout (s) - default: 30
    RANDOMCHESS_PATH: Store read by the uploader - default: output file
    METADATA_PATH: Upload response file - default: ./metadata.json
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

from .core.errors import ConfigError

DEFAULT_OUTPUT_FILE = "randomchess.json"
DEFAULT_LOG_FILE = "microchess.log"
DEFAULT_METADATA_FILE = "metadata.json"
DEFAULT_UPLOAD_URL = "https://api.jsonbin.io/v3/b"


def _int(env: Mapping[str, str], key: str, default: int, minimum: int = 1) -> int:
    val = env.get(key)
    if not val:
        return default
    try:
        parsed = int(val.strip())
    except ValueError:
        return default
    return parsed if parsed >= minimum else default


def _float(env: Mapping[str, str], key: str, default: float) -> float:
    val = env.get(key)
    if not val:
        return default
    try:
        parsed = float(val.strip())
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _bool(env: Mapping[str, str], key: str) -> bool:
    return (env.get(key) or "").strip().lower() in ("1", "true", "yes")


def _path(env: Mapping[str, str], key: str, default: str) -> str:
    val = (env.get(key) or "").strip()
    return os.path.abspath(val or default)


@dataclass(frozen=True)
class Settings:
    output_file: str
    log_file: str
    max_size_bytes: int
    generator_interval_ms: int
    max_moves: int
    max_write_retries: int
    log_level: str
    log_format: str
    run_once: bool
    prefer_external_rng: bool
    seed: Optional[str]
    drain_timeout: float
    replay_base_dir: str
    upload_interval_ms: int
    access_key: Optional[str]
    upload_url: str
    upload_timeout: float
    upload_source_path: str
    metadata_path: str

    @staticmethod
    def from_env(env: Optional[Mapping[str, str]] = None, dotenv: bool = True) -> "Settings":
        """
        Build settings from environment variables.

        Invalid or non-positive numbers fall back to their defaults
        (MICROCHESS_MAX_MOVES also accepts 0).

        Args:
            env: Mapping to read (default: os.environ)
            dotenv: Load ./.env into os.environ first
        """
        if env is None:
            if dotenv:
                load_dotenv(os.path.join(os.getcwd(), ".env"), override=False)
            env = os.environ

        output_file = _path(env, "MICROCHESS_OUTPUT_FILE", DEFAULT_OUTPUT_FILE)
        seed = (env.get("MICROCHESS_SEED") or "").strip() or None
        access_key = (env.get("JSONBIN_ACCESS_KEY") or "").strip() or None

        return Settings(
            output_file=output_file,
            log_file=_path(env, "MICROCHESS_LOG_FILE", DEFAULT_LOG_FILE),
            max_size_bytes=_int(env, "MICROCHESS_MAX_SIZE_BYTES", 1024 * 1024),
            generator_interval_ms=_int(env, "MICROCHESS_GENERATOR_INTERVAL", 3600000),
            max_moves=_int(env, "MICROCHESS_MAX_MOVES", 100, minimum=0),
            max_write_retries=_int(env, "MICROCHESS_MAX_WRITE_RETRIES", 3),
            log_level=(env.get("MICROCHESS_LOG_LEVEL") or "info").strip().lower(),
            log_format=(env.get("MICROCHESS_LOG_FORMAT") or "text").strip().lower(),
            run_once=_bool(env, "MICROCHESS_RUN_ONCE"),
            prefer_external_rng=_bool(env, "MICROCHESS_USE_SEEDRANDOM")
            or _bool(env, "MICROCHESS_PREFER_EXTERNAL_RNG"),
            seed=seed,
            drain_timeout=_float(env, "MICROCHESS_DRAIN_TIMEOUT", 5.0),
            replay_base_dir=_path(env, "MICROCHESS_REPLAY_BASE_DIR", os.path.dirname(output_file)),
            upload_interval_ms=_int(env, "MICROCHESS_INTERVAL", 3600000),
            access_key=access_key,
            upload_url=(env.get("JSONBIN_URL") or DEFAULT_UPLOAD_URL).strip(),
            upload_timeout=_float(env, "JSONBIN_TIMEOUT", 30.0),
            upload_source_path=_path(env, "RANDOMCHESS_PATH", output_file),
            metadata_path=_path(env, "METADATA_PATH", DEFAULT_METADATA_FILE),
        )

    @property
    def generator_interval(self) -> float:
        """Generation interval in seconds."""
        return self.generator_interval_ms / 1000.0

    @property
    def upload_interval(self) -> float:
        """Upload interval in seconds."""
        return self.upload_interval_ms / 1000.0

    def require_access_key(self) -> str:
        """
        Return the upload access key.

        Raises:
            ConfigError: If JSONBIN_ACCESS_KEY is not set
        """
        if not self.access_key:
            raise ConfigError("JSONBIN_ACCESS_KEY is not set")
        return self.access_key
