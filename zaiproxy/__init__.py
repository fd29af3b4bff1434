"""zaiproxy - OpenAI dialect proxy for the Z.AI chat completions API.

Lets clients written against the OpenAI legacy Completions, Chat Completions
or Responses APIs talk to a backend that only implements Chat Completions.

This module provides:
- create_app: FastAPI application factory
- Translators for the legacy Completions and Responses dialects
- A pass-through proxy for requests already in the backend's dialect

Example:
    >>> from zaiproxy import create_app
    >>> import uvicorn
    >>> uvicorn.run(create_app(), host="127.0.0.1", port=8787)
"""

from .config_loader import ProxySettings, build_settings, load_config, load_settings
from .core import Backend, BackendClient, normalize_role
from .logging import logger, setup_logging
from .main import create_app

__version__ = "0.1.0"

__all__ = [
    "Backend",
    "BackendClient",
    "ProxySettings",
    "build_settings",
    "create_app",
    "load_config",
    "load_settings",
    "logger",
    "normalize_role",
    "setup_logging",
]
