"""Errors raised while preparing or establishing an authenticated session.

Three failure modes, each with its own diagnosis:
- ConfigurationError: credentials are missing, nothing was sent to the app
- RejectedCredentials: the app answered "Invalid credentials"
- IndeterminateLogin: the app never reached a known state
"""

from typing import List, Optional


EMAIL_ENV_VAR = "TEST_USER_EMAIL"
PASSWORD_ENV_VAR = "TEST_USER_PASSWORD"


class E2EError(Exception):
    """Base class for todo-e2e errors."""


class ConfigurationError(E2EError):
    """Required configuration is missing or invalid."""

    def __init__(self, message: str, missing: Optional[List[str]] = None):
        super().__init__(message)
        self.missing = list(missing or [])

    @classmethod
    def missing_credentials(
        cls, missing: List[str], env_file: str = "config/.env.dev"
    ) -> "ConfigurationError":
        return cls(
            f"Set {EMAIL_ENV_VAR} and {PASSWORD_ENV_VAR} in {env_file} "
            f"(see config/.env.example). Missing: {', '.join(missing)}",
            missing=missing,
        )


class RejectedCredentials(E2EError):
    """The rejection marker appeared before the success marker."""

    def __init__(self, env_file: str = "config/.env.dev"):
        super().__init__(
            'Login failed: the app showed "Invalid credentials" and the todo app '
            "UI never appeared. "
            f"Check {EMAIL_ENV_VAR} and {PASSWORD_ENV_VAR} in {env_file} "
            "and that the user exists at the app."
        )
        self.env_file = env_file


class IndeterminateLogin(E2EError):
    """Neither marker appeared before the deadline."""

    def __init__(self, timeout_ms: int):
        seconds = timeout_ms / 1000
        super().__init__(
            f"Login failed: neither the todo app UI nor an \"Invalid credentials\" "
            f"message appeared within {seconds:g}s. The app did not reach a known "
            "state, so this is not a credentials problem. "
            "Check BASE_URL and that the app is available."
        )
        self.timeout_ms = timeout_ms
