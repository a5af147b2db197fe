"""Session status display for CLI"""

from rich.table import Table
from session import SessionStore


def get_auth_status(store: SessionStore) -> tuple[str, str]:
    """
    Get authentication status and token expiry info

    Args:
        store: Session store

    Returns:
        Tuple of (status, detail_message)
    """
    status = store.get_status()

    if not status["has_access_token"]:
        return "NO AUTH", "Not logged in"

    user = status["username"] or "unknown user"
    expiry = status["access_expiry"]
    if expiry == "expired":
        if status["has_refresh_token"]:
            return "EXPIRED", f"{user}, access token will refresh on next request"
        return "EXPIRED", f"{user}, login required"
    if expiry and expiry != "unknown":
        return "VALID", f"{user}, access token expires in {expiry}"
    return "VALID", user


def show_session_status(store: SessionStore, console, session_file=None):
    """
    Display detailed session status

    Args:
        store: Session store
        console: Rich console for output
        session_file: Path of the backing file, if any
    """
    status = store.get_status()

    table = Table(title="Session Status")
    table.add_column("Property", style="cyan")
    table.add_column("Value")

    table.add_row("Logged In", "Yes" if status["has_access_token"] else "No")
    table.add_row("User", status["username"] or "-")
    table.add_row("Refresh Token", "Present" if status["has_refresh_token"] else "Missing")
    if status["access_expiry"]:
        table.add_row("Access Token Expiry", status["access_expiry"])
    if session_file:
        table.add_row("Session File", str(session_file))

    console.print(table)
