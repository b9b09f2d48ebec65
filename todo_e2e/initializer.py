"""Interactive writer for config/.env.<APP_ENV>.

Asks for the app URL and the test user, then renders the env file from a
template. Non-interactive mode takes values as given and fills the rest
with defaults.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import questionary
from jinja2 import Environment, PackageLoader, select_autoescape
from rich.console import Console

from .config import (
    BROWSERS,
    DEFAULT_APP_ENV,
    DEFAULT_BROWSER,
    DEFAULT_LOGIN_TIMEOUT_MS,
    env_file_path,
)
from .errors import ConfigurationError


console = Console()

DEFAULT_BASE_URL = "http://localhost:3000"


def env_quote(value: Optional[str]) -> str:
    """Double-quote a value for a dotenv file."""
    escaped = (value or "").replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


@dataclass
class EnvSettings:
    """Values written to the env file."""

    app_env: str = DEFAULT_APP_ENV
    base_url: str = DEFAULT_BASE_URL
    email: str = ""
    password: str = ""
    login_timeout_ms: int = DEFAULT_LOGIN_TIMEOUT_MS
    browser: str = DEFAULT_BROWSER

    def to_dict(self) -> dict:
        return {
            "app_env": self.app_env,
            "base_url": self.base_url,
            "email": self.email,
            "password": self.password,
            "login_timeout_ms": self.login_timeout_ms,
            "browser": self.browser,
        }


class EnvFileInitializer:
    """Writes config/.env.<app_env> for a project."""

    def __init__(
        self,
        project_path: str,
        settings: Optional[EnvSettings] = None,
        non_interactive: bool = False,
    ):
        """Initialize with project path.

        Args:
            project_path: Project root; the file goes into its config/ directory.
            settings: Initial values (used as prompt defaults when interactive).
            non_interactive: If True, skip prompts and use the given values.
        """
        self.project_path = Path(project_path).resolve()
        self.settings = settings or EnvSettings()
        self.non_interactive = non_interactive

        self.jinja_env = Environment(
            loader=PackageLoader("todo_e2e", "templates"),
            autoescape=select_autoescape(),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.jinja_env.filters["env_quote"] = env_quote

    @property
    def target(self) -> Path:
        return env_file_path(str(self.project_path), self.settings.app_env)

    def run(self, force: bool = False) -> Path:
        """Collect values and write the file.

        Args:
            force: Overwrite an existing file without asking.

        Returns:
            Path of the written file.
        """
        if self.target.exists() and not force:
            if self.non_interactive or not questionary.confirm(
                f"{self.target} exists. Overwrite?", default=False
            ).ask():
                raise ConfigurationError(
                    f"{self.target} already exists. Use --force to overwrite."
                )

        if not self.non_interactive:
            self._ask_questions()

        self._validate()
        return self.write()

    def _ask_questions(self):
        """Ask interactive questions."""
        self.settings.base_url = questionary.text(
            "App base URL:",
            default=self.settings.base_url,
        ).ask()

        self.settings.email = questionary.text(
            "Test user email:",
            default=self.settings.email,
        ).ask()

        self.settings.password = questionary.password(
            "Test user password:",
            default=self.settings.password,
        ).ask()

        timeout_str = questionary.text(
            "Login timeout (ms):",
            default=str(self.settings.login_timeout_ms),
        ).ask()
        if timeout_str and timeout_str.isdigit():
            self.settings.login_timeout_ms = int(timeout_str)

        self.settings.browser = questionary.select(
            "Browser:",
            choices=BROWSERS,
            default=self.settings.browser if self.settings.browser in BROWSERS else None,
        ).ask()

    def _validate(self):
        missing = []
        if not self.settings.base_url:
            missing.append("BASE_URL")
        if not self.settings.email:
            missing.append("TEST_USER_EMAIL")
        if not self.settings.password:
            missing.append("TEST_USER_PASSWORD")
        if missing:
            raise ConfigurationError(
                f"Cannot write {self.target}: missing {', '.join(missing)}",
                missing=missing,
            )
        if self.settings.browser not in BROWSERS:
            raise ConfigurationError(
                f"Unknown browser: {self.settings.browser}. "
                f"Expected one of: {', '.join(BROWSERS)}"
            )

    def render(self) -> str:
        template = self.jinja_env.get_template("env.j2")
        return template.render(**self.settings.to_dict()) + "\n"

    def write(self) -> Path:
        self.target.parent.mkdir(parents=True, exist_ok=True)
        self.target.write_text(self.render())
        console.print(f"  [green]Created:[/green] {self.target}")
        return self.target


def initialize_env_file(
    project_path: str,
    settings: Optional[EnvSettings] = None,
    non_interactive: bool = False,
    force: bool = False,
) -> Path:
    """Write config/.env.<app_env> for a project.

    Args:
        project_path: Project root.
        settings: Initial values.
        non_interactive: Skip prompts.
        force: Overwrite an existing file.

    Returns:
        Path of the written file.
    """
    initializer = EnvFileInitializer(project_path, settings, non_interactive)
    return initializer.run(force=force)
