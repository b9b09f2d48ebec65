"""CLI interface for todo-e2e.

Commands:
- install: Install Playwright browsers
- run: Run the e2e suite
- env: Show the resolved configuration
- init-env: Write config/.env.<APP_ENV>
- login: Smoke-test the login against the app
- hook: Editor hooks (after-edit)
"""

import subprocess
import sys
import time
from pathlib import Path

import click
from playwright.sync_api import sync_playwright
from rich.console import Console
from rich.table import Table

from . import __version__
from .config import BROWSERS, load_config, require_credentials
from .errors import E2EError
from .hooks import run_after_edit
from .initializer import EnvSettings, initialize_env_file
from .session import attempt_login, raise_for_outcome


console = Console()


def _load_config(ctx):
    try:
        return load_config(ctx.obj["project_path"])
    except E2EError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


@click.group()
@click.version_option(version=__version__, prog_name="todo-e2e")
@click.pass_context
def main(ctx):
    """todo-e2e - Browser tests for the todo app.

    Configuration comes from the environment and config/.env.<APP_ENV>:
    BASE_URL, TEST_USER_EMAIL, TEST_USER_PASSWORD, LOGIN_TIMEOUT_MS, BROWSER.
    """
    ctx.ensure_object(dict)
    ctx.obj["project_path"] = str(Path.cwd())


# --- Suite Commands ---


@main.command()
@click.option("--with-deps", is_flag=True, help="Also install system dependencies")
def install(with_deps: bool):
    """Install Playwright browsers."""
    cmd = [sys.executable, "-m", "playwright", "install"]
    if with_deps:
        cmd.append("--with-deps")

    console.print("[yellow]Installing browsers...[/yellow]")

    try:
        subprocess.run(cmd, check=True)
        console.print("[green]Browsers installed.[/green]")
    except subprocess.CalledProcessError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


@main.command()
@click.argument("target", required=False)
@click.option("--headed", is_flag=True, help="Run with visible browser")
@click.option("--slow", is_flag=True, help="Run in slow motion")
@click.option("--browser", "-b", type=click.Choice(BROWSERS), help="Browser to run")
@click.pass_context
def run(ctx, target: str, headed: bool, slow: bool, browser: str):
    """Run E2E tests (the whole suite, or TARGET)."""
    project_path = Path(ctx.obj["project_path"])
    e2e_dir = project_path / "e2e"

    if target is None and not e2e_dir.exists():
        console.print("[red]E2E directory not found.[/red]")
        sys.exit(1)

    browser = browser or _load_config(ctx).browser

    cmd = [sys.executable, "-m", "pytest", target or str(e2e_dir), "-v", "--browser", browser]

    if headed:
        cmd.append("--headed")
    if slow:
        cmd.extend(["--slowmo", "500"])

    console.print(f"[yellow]Running: {' '.join(cmd)}[/yellow]")

    try:
        subprocess.run(cmd, check=True, cwd=project_path)
    except subprocess.CalledProcessError as e:
        sys.exit(e.returncode)


# --- Configuration Commands ---


@main.command("env")
@click.pass_context
def show_env(ctx):
    """Show the resolved configuration."""
    config = _load_config(ctx)

    table = Table(title=f"Configuration ({config.app_env})")
    table.add_column("Key", style="cyan")
    table.add_column("Value")

    for key, value in config.to_dict().items():
        table.add_row(key, "[dim](not set)[/dim]" if value is None else str(value))

    console.print(table)

    missing = config.credentials.missing()
    if not config.base_url:
        missing.insert(0, "BASE_URL")

    if missing:
        console.print(f"\n[yellow]Missing: {', '.join(missing)}[/yellow]")
        console.print(f"[dim]Set them in {config.env_file_hint} (see config/.env.example)[/dim]")
    else:
        console.print("\n[green]Configuration complete.[/green]")


@main.command("init-env")
@click.option("--env", "app_env", default="dev", help="Environment name (default: dev)")
@click.option("--base-url", default=None, help="Root URL of the app under test")
@click.option("--email", default="", help="Test user email")
@click.option("--password", default="", help="Test user password")
@click.option("--timeout", "timeout_ms", type=int, default=None, help="Login timeout in ms")
@click.option("--browser", "-b", type=click.Choice(BROWSERS), default="chromium")
@click.option("--non-interactive", "-y", is_flag=True, help="Use given values without prompting")
@click.option("--force", "-f", is_flag=True, help="Overwrite an existing file")
@click.pass_context
def init_env(
    ctx,
    app_env: str,
    base_url: str,
    email: str,
    password: str,
    timeout_ms: int,
    browser: str,
    non_interactive: bool,
    force: bool,
):
    """Write config/.env.<ENV> for the test user."""
    settings = EnvSettings(app_env=app_env, email=email, password=password, browser=browser)
    if base_url:
        settings.base_url = base_url
    if timeout_ms:
        settings.login_timeout_ms = timeout_ms

    try:
        path = initialize_env_file(
            ctx.obj["project_path"],
            settings,
            non_interactive=non_interactive,
            force=force,
        )
    except E2EError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Cancelled.[/yellow]")
        sys.exit(1)

    console.print(f"\n[green]Wrote {path}[/green]")
    if app_env != "dev":
        console.print(f"[dim]Use it with APP_ENV={app_env}[/dim]")


# --- Login Command ---


@main.command()
@click.option("--headed", is_flag=True, help="Run with visible browser")
@click.option("--timeout", "timeout_ms", type=int, default=None, help="Login timeout in ms")
@click.pass_context
def login(ctx, headed: bool, timeout_ms: int):
    """Sign in as the test user and report the outcome."""
    config = _load_config(ctx)
    timeout_ms = timeout_ms or config.login_timeout_ms

    try:
        require_credentials(config.credentials, env_file=config.env_file_hint)
    except E2EError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)

    if not config.base_url:
        console.print(f"[red]Error: Set BASE_URL in {config.env_file_hint}[/red]")
        sys.exit(1)

    console.print(
        f"[yellow]Signing in to {config.base_url} as {config.credentials.email} "
        f"({config.browser})...[/yellow]"
    )

    with sync_playwright() as playwright:
        browser = getattr(playwright, config.browser).launch(headless=not headed)
        try:
            context = browser.new_context(base_url=config.base_url)
            page = context.new_page()
            started = time.monotonic()
            outcome = attempt_login(page, config.credentials, timeout_ms=timeout_ms)
            elapsed = time.monotonic() - started
        finally:
            browser.close()

    try:
        raise_for_outcome(outcome, timeout_ms, config.env_file_hint)
    except E2EError as e:
        console.print(f"[red]{outcome.value.title()} after {elapsed:.1f}s[/red]")
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)

    console.print(f"[green]Signed in after {elapsed:.1f}s.[/green]")


# --- Hook Commands ---


@main.group()
def hook():
    """Editor hooks."""
    pass


@hook.command("after-edit")
def hook_after_edit():
    """Rerun a test file after the editor changed it (payload on stdin)."""
    raw = click.get_text_stream("stdin").read()
    sys.exit(run_after_edit(raw))


if __name__ == "__main__":
    main()
