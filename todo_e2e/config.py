"""Environment-based configuration for the e2e suite.

Values come from the process environment, falling back to
config/.env.<APP_ENV> in the project root:
- BASE_URL: root URL of the app under test
- TEST_USER_EMAIL / TEST_USER_PASSWORD: dedicated test user
- LOGIN_TIMEOUT_MS: shared deadline for the login race
- BROWSER: chromium, firefox or webkit
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Mapping, Optional

from dotenv import dotenv_values
from rich.console import Console

from .errors import ConfigurationError, EMAIL_ENV_VAR, PASSWORD_ENV_VAR


console = Console()

DEFAULT_APP_ENV = "dev"
DEFAULT_LOGIN_TIMEOUT_MS = 15000
DEFAULT_BROWSER = "chromium"
BROWSERS = ["chromium", "firefox", "webkit"]
CONFIG_DIR = "config"


@dataclass(frozen=True)
class Credentials:
    """Login identifier and secret for the test user."""

    email: Optional[str] = None
    password: Optional[str] = field(default=None, repr=False)

    @classmethod
    def from_env(cls, environ: Mapping[str, str]) -> "Credentials":
        return cls(
            email=environ.get(EMAIL_ENV_VAR) or None,
            password=environ.get(PASSWORD_ENV_VAR) or None,
        )

    def missing(self) -> List[str]:
        """Names of the environment variables that are not set."""
        missing = []
        if not self.email:
            missing.append(EMAIL_ENV_VAR)
        if not self.password:
            missing.append(PASSWORD_ENV_VAR)
        return missing

    @property
    def is_complete(self) -> bool:
        return not self.missing()


@dataclass
class E2EConfig:
    """Resolved configuration for one test run."""

    app_env: str = DEFAULT_APP_ENV
    base_url: Optional[str] = None
    credentials: Credentials = field(default_factory=Credentials)
    login_timeout_ms: int = DEFAULT_LOGIN_TIMEOUT_MS
    browser: str = DEFAULT_BROWSER
    env_file: Optional[Path] = None
    ci: bool = False

    @property
    def env_file_hint(self) -> str:
        """Relative env file path used in error messages."""
        return f"{CONFIG_DIR}/.env.{self.app_env}"

    def to_dict(self) -> dict:
        return {
            "app_env": self.app_env,
            "base_url": self.base_url,
            "email": self.credentials.email,
            "password": "********" if self.credentials.password else None,
            "login_timeout_ms": self.login_timeout_ms,
            "browser": self.browser,
            "env_file": str(self.env_file) if self.env_file else None,
            "ci": self.ci,
        }


def env_file_path(project_path: str, app_env: str) -> Path:
    """Path of the env file for an app environment."""
    return Path(project_path).resolve() / CONFIG_DIR / f".env.{app_env}"


def load_env_file(
    project_path: str, app_env: str, ci: bool = False
) -> Dict[str, str]:
    """Read config/.env.<app_env>.

    Args:
        project_path: Project root containing the config/ directory.
        app_env: Environment name (dev, staging, ...).
        ci: Suppress the missing-file warning.

    Returns:
        Values from the file, empty when it does not exist.
    """
    path = env_file_path(project_path, app_env)

    if not path.exists():
        if not ci:
            console.print(f"[yellow]Environment file {path} not found.[/yellow]")
        return {}

    return {key: value for key, value in dotenv_values(path).items() if value is not None}


def _parse_timeout(raw: Optional[str]) -> int:
    if raw is None or raw == "":
        return DEFAULT_LOGIN_TIMEOUT_MS
    try:
        timeout = int(raw)
    except ValueError:
        raise ConfigurationError(f"LOGIN_TIMEOUT_MS must be an integer, got {raw!r}")
    if timeout <= 0:
        raise ConfigurationError(f"LOGIN_TIMEOUT_MS must be positive, got {timeout}")
    return timeout


def _parse_browser(raw: Optional[str]) -> str:
    browser = raw or DEFAULT_BROWSER
    if browser not in BROWSERS:
        raise ConfigurationError(
            f"BROWSER must be one of: {', '.join(BROWSERS)}, got {browser!r}"
        )
    return browser


def load_config(
    project_path: str = ".", environ: Optional[Mapping[str, str]] = None
) -> E2EConfig:
    """Resolve configuration from the environment and the env file.

    Process environment values take precedence over the env file.
    """
    if environ is None:
        environ = os.environ

    app_env = environ.get("APP_ENV") or DEFAULT_APP_ENV
    ci = bool(environ.get("CI"))

    file_values = load_env_file(project_path, app_env, ci=ci)
    merged = {**file_values, **environ}

    path = env_file_path(project_path, app_env)

    return E2EConfig(
        app_env=app_env,
        base_url=merged.get("BASE_URL") or None,
        credentials=Credentials.from_env(merged),
        login_timeout_ms=_parse_timeout(merged.get("LOGIN_TIMEOUT_MS")),
        browser=_parse_browser(merged.get("BROWSER")),
        env_file=path if path.exists() else None,
        ci=ci,
    )


def require_credentials(
    credentials: Credentials, env_file: str = f"{CONFIG_DIR}/.env.{DEFAULT_APP_ENV}"
) -> Credentials:
    """Raise ConfigurationError unless both credentials are set."""
    missing = credentials.missing()
    if missing:
        raise ConfigurationError.missing_credentials(missing, env_file=env_file)
    return credentials
