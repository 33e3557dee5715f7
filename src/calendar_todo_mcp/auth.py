"""OAuth2 token handling and automatic refresh."""

import logging
import os
from pathlib import Path

from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow

from . import errors

logger = logging.getLogger(__name__)

SCOPES = [
    "https://www.googleapis.com/auth/calendar",
    "https://www.googleapis.com/auth/calendar.events",
    "https://www.googleapis.com/auth/tasks",
]

CREDENTIALS_ENV = "GOOGLE_OAUTH_CREDENTIALS"
TOKEN_PATH_ENV = "GOOGLE_CALENDAR_MCP_TOKEN_PATH"
DEFAULT_TOKEN_PATH = Path.home() / ".config" / "google-calendar-todo-mcp" / "token.json"


def get_token_path() -> Path:
    override = os.environ.get(TOKEN_PATH_ENV)
    return Path(override).expanduser() if override else DEFAULT_TOKEN_PATH


def get_client_secrets_path() -> Path:
    keyfile = os.environ.get(CREDENTIALS_ENV)
    if not keyfile:
        raise errors.AuthError(errors.MISSING_CLIENT_SECRETS)
    return Path(keyfile).expanduser()


def _load_cached_credentials(token_path: Path) -> Credentials | None:
    if not token_path.exists():
        return None
    try:
        return Credentials.from_authorized_user_file(str(token_path), SCOPES)
    except (OSError, ValueError) as e:
        # An unreadable cache is not fatal; the interactive flow replaces it.
        logger.warning("Ignoring unreadable token cache %s: %s", token_path, e)
        return None


def _save_credentials(creds: Credentials, token_path: Path) -> None:
    token_path.parent.mkdir(parents=True, exist_ok=True)
    with open(token_path, "w") as f:
        f.write(creds.to_json())


def _run_interactive_flow(client_secrets: Path) -> Credentials:
    if not client_secrets.exists():
        raise errors.AuthError(f"OAuth client credentials file not found at {client_secrets}.")
    try:
        flow = InstalledAppFlow.from_client_secrets_file(str(client_secrets), SCOPES)
        return flow.run_local_server(port=0)
    except Exception as e:
        raise errors.AuthError(f"Interactive authorization failed: {e}") from e


def get_credentials() -> Credentials:
    """
    Return valid credentials for the Calendar and Tasks APIs.
    Loads the cached token, refreshes it if expired, or runs the OAuth flow.
    Raises AuthError if no client secrets are configured or the flow cannot complete.
    """
    client_secrets = get_client_secrets_path()
    token_path = get_token_path()

    creds = _load_cached_credentials(token_path)
    if creds and creds.valid:
        return creds

    if creds and creds.expired and creds.refresh_token:
        try:
            creds.refresh(Request())
        except GoogleAuthError as e:
            logger.warning("Token refresh failed, re-running authorization: %s", e)
            creds = None
    else:
        creds = None

    if creds is None:
        creds = _run_interactive_flow(client_secrets)

    _save_credentials(creds, token_path)
    return creds
