"""Main CLI application class for the hospital admin client"""

import asyncio
import logging
from typing import Any, Awaitable, Optional, Tuple

import httpx
from pydantic import ValidationError
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table

from api import HospitalAPI, TokenRefreshError, describe_error
from auth import AuthService
from cli.debug_setup import setup_debug_console
from cli.forms import prompt_register_form
from cli.menu import clear_screen, display_auth_menu, display_header, display_main_menu
from cli.record_screens import build_screens
from cli.status_display import show_session_status
from cli.tables import MAPPING_COLUMNS, build_record_table
from session import FileSessionStore
from settings import API_BASE_URL, LOGIN_PATH

logger = logging.getLogger(__name__)

API_ERRORS = (httpx.HTTPError, TokenRefreshError)


class HospitalAdminCLI:
    """Interactive terminal front end for the hospital records API"""

    def __init__(
        self,
        debug: bool = False,
        base_url: Optional[str] = None,
        session_file: Optional[str] = None,
    ):
        self.debug = debug
        self.base_url = base_url or API_BASE_URL
        self.console = setup_debug_console(debug, self.base_url)

        if debug:
            self.console.print("[yellow]Debug mode enabled - verbose logging will be written to the debug log[/yellow]")

        self.store = FileSessionStore(session_file)
        # Set by the HTTP client when the session cannot be recovered
        self.pending_route: Optional[str] = None
        self.on_login_screen = False
        self.api = HospitalAPI(self.store, base_url=self.base_url, on_auth_failure=self.redirect_to_login)
        self.auth = AuthService(self.api)
        self.screens = build_screens(self)

        self.loop = asyncio.new_event_loop()
        asyncio.set_event_loop(self.loop)

    # Plumbing

    def redirect_to_login(self, path: str):
        """Terminal auth failure callback registered with the HTTP client"""
        logger.info(f"Redirect to {path} requested by HTTP client")
        self.pending_route = path
        if not self.on_login_screen:
            self.console.print("[yellow]Your session has expired. Please log in again.[/yellow]")

    def session_active(self) -> bool:
        return self.pending_route != LOGIN_PATH and self.auth.is_authenticated()

    def call(self, coro: Awaitable[Any], failure_message: str) -> Tuple[bool, Any]:
        """Run an API coroutine, printing a readable message if it fails

        Returns:
            Tuple of (success, result)
        """
        try:
            return True, self.loop.run_until_complete(coro)
        except API_ERRORS as e:
            logger.debug(f"API call failed: {e!r}")
            self.console.print(f"[red]✗ {describe_error(e, failure_message)}[/red]")
        except ValidationError as e:
            logger.error(f"Unexpected API response: {e}")
            self.console.print("[red]✗ Unexpected response from the API[/red]")
        return False, None

    def pause(self):
        self.console.print("\nPress Enter to continue...")
        input()

    def shutdown(self):
        self.loop.run_until_complete(self.api.aclose())
        self.loop.close()
        asyncio.set_event_loop(None)

    # Screens

    def display_user_header(self):
        user = self.auth.get_current_user()
        if user is None:
            name = "unknown"
        else:
            name = f"{user.first_name} {user.last_name}".strip() or user.username
        self.console.print(Panel.fit(
            f"[bold cyan]Hospital Records Admin[/bold cyan]\n[dim]Signed in as {name}[/dim]",
            border_style="cyan"
        ))

    def login(self) -> bool:
        username = Prompt.ask("Username")
        password = Prompt.ask("Password", password=True)
        ok, auth = self.call(self.auth.login(username, password), "Login failed. Please try again.")
        if ok:
            self.console.print(f"\n[bold green]✓ {auth.message or 'Login successful'}[/bold green]")
        return ok

    def register(self) -> bool:
        form = prompt_register_form(self.console)
        if form.password != form.password2:
            self.console.print("[red]✗ Passwords do not match[/red]")
            return False
        ok, auth = self.call(self.auth.register(form), "Registration failed. Please try again.")
        if ok:
            self.console.print(f"\n[bold green]✓ {auth.message or 'Registration successful'}[/bold green]")
        return ok

    def auth_screen(self) -> bool:
        """Login/register until signed in

        Returns:
            False if the user chose to exit
        """
        self.on_login_screen = True
        try:
            while True:
                # A rejected login also reaches the client's 401 handler
                self.pending_route = None
                display_header(self.console)
                display_auth_menu(self.console)
                choice = Prompt.ask("Select option", choices=["1", "2", "3"])
                if choice == "3":
                    return False
                if choice == "1" and self.login():
                    self.pending_route = None
                    return True
                if choice == "2" and self.register():
                    self.pending_route = None
                    return True
                self.pause()
        finally:
            self.on_login_screen = False

    def show_dashboard(self):
        ok, stats = self.call(self.api.dashboard(), "Failed to fetch dashboard data")
        if not ok:
            return

        table = Table(title="Dashboard", show_header=False)
        table.add_column("Metric", style="cyan")
        table.add_column("Value")
        table.add_row("Total Patients", str(stats.total_patients))
        table.add_row("Total Doctors", str(stats.total_doctors))
        table.add_row("Total Mappings", str(stats.total_mappings))
        table.add_row("Active Mappings", str(stats.active_mappings))
        self.console.print(table)

        if stats.recent_patients:
            self.console.print("[bold]Recent Patients:[/bold] " + ", ".join(
                p.full_name or f"{p.first_name} {p.last_name}" for p in stats.recent_patients
            ))
        if stats.recent_doctors:
            self.console.print("[bold]Recent Doctors:[/bold] " + ", ".join(
                d.full_name or f"{d.first_name} {d.last_name}" for d in stats.recent_doctors
            ))
        if stats.recent_mappings:
            self.console.print(build_record_table("Recent Mappings", stats.recent_mappings, MAPPING_COLUMNS))

    def show_profile(self):
        ok, user = self.call(self.auth.get_profile(), "Failed to fetch profile")
        if ok:
            self.console.print(f"[bold]Profile:[/bold] {user.username} <{user.email}> (ID {user.id})")
        show_session_status(self.store, self.console, self.store.session_file)

    def logout(self):
        if Confirm.ask("Log out?", default=True):
            self.auth.logout()
            self.console.print("[green]✓ Logged out[/green]")

    def run(self):
        """Main CLI loop"""
        try:
            while True:
                if not self.session_active():
                    if not self.auth_screen():
                        break
                    continue

                clear_screen(self.console)
                self.display_user_header()
                display_main_menu(self.store, self.base_url, self.console)

                choice = Prompt.ask("Select option", choices=["1", "2", "3", "4", "5", "6", "7"])

                if choice == "1":
                    self.show_dashboard()
                    self.pause()
                elif choice in self.screens:
                    self.screens[choice].run()
                elif choice == "5":
                    self.show_profile()
                    self.pause()
                elif choice == "6":
                    self.logout()
                elif choice == "7":
                    break

            self.console.print("\n[cyan]Goodbye![/cyan]\n")
        finally:
            self.shutdown()
