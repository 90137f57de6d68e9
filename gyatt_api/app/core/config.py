"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields.  Values
are read when a ``Settings`` instance is created (not at import time),
so a launcher can load a ``.env`` file first and tests can build an
instance with explicit overrides and hand it to ``create_app``.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from fastapi import Request

# Directory containing the gyatt_api package (the project root).
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent.parent


def _env(name: str, default: str = "") -> str:
    return os.getenv(name, default)


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = field(default_factory=lambda: _env("PROJECT_NAME", "GYATT PPL Backend"))
    api_version: str = field(default_factory=lambda: _env("API_VERSION", "1.0.0"))
    debug: bool = field(default_factory=lambda: _env_bool("DEBUG"))
    log_level: str = field(default_factory=lambda: _env("LOG_LEVEL", "INFO"))
    log_file: Optional[str] = field(default_factory=lambda: _env("LOG_FILE") or None)

    # Token signing.  JWT_SECRET must be overridden in any real deployment.
    secret_key: str = field(default_factory=lambda: _env("JWT_SECRET", "change_me"))
    algorithm: str = field(default_factory=lambda: _env("ALGORITHM", "HS256"))
    access_token_expire_minutes: int = field(
        default_factory=lambda: int(_env("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24 * 7)))
    )

    # bcrypt cost factor.  Tests lower this to the minimum (4).
    bcrypt_rounds: int = field(default_factory=lambda: int(_env("BCRYPT_ROUNDS", "10")))

    # Storage.  ``data_dir`` holds users.json, missions.json and
    # suggestions.json; a relative path is resolved against the project
    # root, not the working directory.  ``storage_backend`` may be
    # ``file`` or ``memory``.
    data_dir: str = field(default_factory=lambda: _env("DATA_DIR", "database"))
    storage_backend: str = field(default_factory=lambda: _env("STORAGE_BACKEND", "file"))

    # Credentials for the administrator created when the user store is
    # empty.  If ADMIN_PASSWORD is not set a random password is generated
    # at startup and logged once.
    admin_email: str = field(default_factory=lambda: _env("ADMIN_EMAIL", "admin@gyatt.local"))
    admin_password: Optional[str] = field(default_factory=lambda: _env("ADMIN_PASSWORD") or None)

    # Comma separated list of allowed origins, ``*`` for any.
    cors_origins: str = field(default_factory=lambda: _env("CORS_ORIGINS", "*"))

    # Optional directory with the static frontend, served at ``/``.
    frontend_dir: Optional[str] = field(default_factory=lambda: _env("FRONTEND_DIR") or None)

    host: str = field(default_factory=lambda: _env("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(_env("PORT", "3000")))

    def cors_origin_list(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


def resolve_path(value: Union[str, os.PathLike]) -> Path:
    """Return ``value`` as an absolute path.

    Absolute paths are used as is.  Relative ones are resolved against
    ``PROJECT_ROOT`` so the server finds the same files whatever
    directory it is started from.
    """
    # Joining an absolute path onto PROJECT_ROOT yields the absolute path.
    return (PROJECT_ROOT / Path(value)).resolve()


def get_settings(request: Request) -> Settings:
    """FastAPI dependency returning the settings the app was built with."""
    return request.app.state.settings
