"""Configuration loading from YAML files with environment variable support."""

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml
from dotenv import dotenv_values

from .core.backend import DEFAULT_BASE_URL, DEFAULT_MODEL, Backend

logger = logging.getLogger("zai-proxy")

# Default path to the config file (relative to project root)
DEFAULT_CONFIG_PATH = "configs/config_default.yaml"

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8787
DEFAULT_RATE_LIMIT_INFO = "~120 prompts per 5 hours (Lite Coding Plan)"

_PLACEHOLDER_PATTERN = re.compile(r"\$\{([^}]+)\}|\$([A-Za-z_][A-Za-z0-9_]*)")


@dataclass(frozen=True)
class ProxySettings:
    """Process-wide settings, resolved once at startup."""

    backend: Backend = field(default_factory=Backend)
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = "INFO"
    service_name: str = "Z.AI OpenAI Proxy"
    rate_limit_info: str = DEFAULT_RATE_LIMIT_INFO


def resolve_config_path(path: str) -> Path:
    """Resolve config path relative to project root if needed."""
    if Path(path).is_absolute():
        return Path(path)
    project_root = Path(__file__).parent.parent
    return project_root / path


def resolve_env_path(config_path: Path, env_path: str | None = None) -> Path:
    """Resolve the env file path for a config file."""
    if env_path:
        return resolve_config_path(env_path)
    stem = config_path.stem
    if stem.startswith("config_"):
        suffix = stem[len("config_"):]
        return config_path.with_name(f".env_{suffix}")
    return config_path.with_name(".env")


def load_env_values(env_path: Path) -> dict[str, str]:
    """Load environment values from a .env file without mutating os.environ."""
    if not env_path.exists():
        return {}
    raw_values = dotenv_values(env_path)
    return {key: value for key, value in raw_values.items() if value is not None}


def load_config(
    path: str | None = None,
    env_path: str | None = None,
    substitute_env: bool = True,
) -> dict:
    """Load configuration from a YAML file.

    Args:
        path: Path to the config file. Defaults to ZAIPROXY_CONFIG,
              or configs/config_default.yaml in the project root.
        env_path: Optional .env path override for env substitution.
        substitute_env: Whether to substitute environment variables in the config.

    Returns:
        Parsed configuration dictionary.

    Raises:
        RuntimeError: If the config file does not exist.
    """
    if path is None:
        path = os.getenv("ZAIPROXY_CONFIG") or DEFAULT_CONFIG_PATH

    config_path = resolve_config_path(path)

    logger.info(f"Loading configuration from {config_path}")

    if not config_path.exists():
        logger.error(f"Config file not found: {config_path}")
        raise RuntimeError(f"Config file not found: {config_path}")

    env_values: dict[str, str] = {}
    if substitute_env:
        env_file = resolve_env_path(config_path, env_path)
        if env_file.exists():
            logger.info(f"Loading environment variables from {env_file}")
            env_values = load_env_values(env_file)

    with config_path.open("r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}

    if substitute_env:
        data = _substitute_env_vars(data, env_values)

    logger.info(f"Configuration loaded successfully from {config_path}")
    return data


def _substitute_env_vars(
    obj: Any, env_values: Mapping[str, str] | None = None
) -> Any:
    """Recursively substitute environment variables in configuration values.

    Supports two formats:
    - ${VAR_NAME}: Braced format
    - $VAR_NAME: Simple format

    Unset variables keep their literal placeholder and a warning is logged.
    """
    env_values = env_values or {}

    if isinstance(obj, dict):
        return {k: _substitute_env_vars(v, env_values) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_substitute_env_vars(item, env_values) for item in obj]
    if isinstance(obj, str):

        def replace_var(match):
            var_name = match.group(1) or match.group(2)
            value = env_values.get(var_name)
            if value is None:
                value = os.getenv(var_name)
            if value is None:
                logger.warning(
                    f"CONFIG ERROR: Environment variable '${var_name}' is not set! "
                    f"Check your .env file or export it in your shell."
                )
                return match.group(0)
            return value

        return _PLACEHOLDER_PATTERN.sub(replace_var, obj)
    return obj


def _get(cfg: Mapping[str, Any], *keys: str) -> Any:
    cur: Any = cfg
    for key in keys:
        if not isinstance(cur, Mapping):
            return None
        cur = cur.get(key)
    return cur


def _to_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    value_str = str(value).strip()
    # An unresolved ${VAR} placeholder means the value was never provided
    if not value_str or _PLACEHOLDER_PATTERN.fullmatch(value_str):
        return None
    return value_str


def _to_int(value: Any) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _to_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def build_settings(
    cfg: Mapping[str, Any], environ: Optional[Mapping[str, str]] = None
) -> ProxySettings:
    """Build settings from a parsed config; environment variables take priority."""
    env = os.environ if environ is None else environ

    base_url = _to_str(env.get("ZAIPROXY_BASE_URL")) or _to_str(
        _get(cfg, "backend", "base_url")
    ) or DEFAULT_BASE_URL
    api_key = _to_str(env.get("ZAI_API_KEY")) or _to_str(_get(cfg, "backend", "api_key"))
    default_model = _to_str(env.get("ZAIPROXY_DEFAULT_MODEL")) or _to_str(
        _get(cfg, "backend", "default_model")
    ) or DEFAULT_MODEL

    timeout = _to_float(env.get("ZAIPROXY_TIMEOUT"))
    if timeout is None:
        timeout = _to_float(_get(cfg, "backend", "timeout_seconds"))
    if timeout is not None and timeout <= 0:
        timeout = None

    host = _to_str(env.get("ZAIPROXY_HOST")) or _to_str(
        _get(cfg, "proxy_settings", "server", "host")
    ) or DEFAULT_HOST
    port = _to_int(env.get("ZAIPROXY_PORT"))
    if port is None:
        port = _to_int(_get(cfg, "proxy_settings", "server", "port")) or DEFAULT_PORT

    log_level = _to_str(env.get("ZAIPROXY_LOG_LEVEL")) or _to_str(
        _get(cfg, "proxy_settings", "logging", "level")
    ) or "INFO"
    service_name = _to_str(_get(cfg, "proxy_settings", "service_name")) or ProxySettings.service_name
    rate_limit_info = _to_str(
        _get(cfg, "proxy_settings", "rate_limit_info")
    ) or DEFAULT_RATE_LIMIT_INFO

    return ProxySettings(
        backend=Backend(
            base_url=base_url,
            api_key=api_key,
            default_model=default_model,
            timeout=timeout,
        ),
        host=host,
        port=port,
        log_level=log_level.upper(),
        service_name=service_name,
        rate_limit_info=rate_limit_info,
    )


def load_settings(path: str | None = None) -> ProxySettings:
    """Load settings from the config file, falling back to defaults."""
    cfg: dict = {}
    try:
        cfg = load_config(path)
    except Exception as exc:
        logger.warning("Failed to load config; using defaults. (%s)", exc)
    settings = build_settings(cfg)
    if not settings.backend.has_credentials:
        logger.warning(
            "No backend API key configured (set ZAI_API_KEY); "
            "non-static routes will return configuration errors"
        )
    return settings
