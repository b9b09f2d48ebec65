"""todo-e2e - End-to-end browser tests for the todo app.

Provides:
- Authenticated session fixture (success/rejection race under one deadline)
- Page objects and data-id selectors
- Environment-based configuration (config/.env.<APP_ENV>)
- CLI for running the suite and checking the login
"""

__version__ = "1.0.0"

from .config import (
    Credentials,
    E2EConfig,
    load_config,
    require_credentials,
)
from .errors import (
    E2EError,
    ConfigurationError,
    RejectedCredentials,
    IndeterminateLogin,
)
from .session import (
    SessionOutcome,
    LoginMarkers,
    DataIdLoginMarkers,
    attempt_login,
    establish_session,
    async_attempt_login,
    async_establish_session,
)

__all__ = [
    # Configuration
    "Credentials",
    "E2EConfig",
    "load_config",
    "require_credentials",
    # Errors
    "E2EError",
    "ConfigurationError",
    "RejectedCredentials",
    "IndeterminateLogin",
    # Session
    "SessionOutcome",
    "LoginMarkers",
    "DataIdLoginMarkers",
    "attempt_login",
    "establish_session",
    "async_attempt_login",
    "async_establish_session",
]
