from __future__ import annotations

import os
import sys
from collections.abc import Mapping
from functools import lru_cache
from pathlib import Path
from typing import Final

from pydantic import BaseModel, ConfigDict

DEFAULT_API_URL: Final[str] = "https://api.maytapi.com"
DEFAULT_PORT: Final[int] = 3000

REQUIRED_ENV_VARS: Final[tuple[str, ...]] = ("MAYTAPI_INSTANCE_ID", "MAYTAPI_TOKEN")


class ConfigurationError(RuntimeError):
    """Raised when required provider credentials are missing from the environment."""

    def __init__(self, missing: list[str]) -> None:
        self.missing = missing
        super().__init__(
            f"{' and '.join(missing)} not found in environment or .env file. "
            "Please check the configuration and restart."
        )


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    maytapi_instance_id: str
    maytapi_token: str

    # Base of the Maytapi REST API; the instance id is appended per call path
    maytapi_api_url: str = DEFAULT_API_URL

    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT

    # Directory holding static/; the installed package ships its own copy
    project_root: Path = Path(__file__).resolve().parent

    @property
    def send_message_url(self) -> str:
        return f"{self.maytapi_api_url.rstrip('/')}/api/{self.maytapi_instance_id}/sendMessage"

    @property
    def static_dir(self) -> Path:
        return self.project_root / "static"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """
        Build settings from environment variables.

        - MAYTAPI_INSTANCE_ID and MAYTAPI_TOKEN are required; blank counts as missing
        - MAYTAPI_API_URL, HOST, PORT and PROJECT_ROOT are optional overrides

        Raises ConfigurationError naming every missing variable.
        """
        env = os.environ if environ is None else environ

        missing = [name for name in REQUIRED_ENV_VARS if not (env.get(name) or "").strip()]
        if missing:
            raise ConfigurationError(missing)

        overrides: dict[str, object] = {}
        if env.get("MAYTAPI_API_URL"):
            overrides["maytapi_api_url"] = env["MAYTAPI_API_URL"]
        if env.get("HOST"):
            overrides["host"] = env["HOST"]
        if env.get("PORT"):
            overrides["port"] = int(env["PORT"])
        if env.get("PROJECT_ROOT"):
            overrides["project_root"] = Path(env["PROJECT_ROOT"])

        return cls(
            maytapi_instance_id=env["MAYTAPI_INSTANCE_ID"].strip(),
            maytapi_token=env["MAYTAPI_TOKEN"].strip(),
            **overrides,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()


def require_settings() -> Settings:
    """
    Load settings once at startup or terminate the process.

    Nothing is served when credentials are missing: the diagnostic goes to
    stderr and the process exits with status 1.
    """
    try:
        return get_settings()
    except ConfigurationError as exc:
        print(f"FATAL: {exc}", file=sys.stderr)
        sys.exit(1)
