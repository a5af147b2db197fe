"""Menu display functionality for CLI"""

from cli.status_display import get_auth_status


def clear_screen(console):
    """Clear the terminal screen"""
    console.clear()


def display_header(console):
    """Display the application header"""
    console.print("=" * 50)
    console.print("    Hospital Records Admin", style="bold")
    console.print("=" * 50)


def display_main_menu(store, base_url: str, console):
    """
    Display the main menu

    Args:
        store: Session store
        base_url: API base URL
        console: Rich console for output
    """
    auth_status, auth_detail = get_auth_status(store)

    if auth_status == "VALID":
        status_style = "green"
    elif auth_status == "EXPIRED":
        status_style = "yellow"
    else:
        status_style = "red"

    console.print(f" Session: [{status_style}]{auth_status}[/{status_style}] ({auth_detail})")
    console.print(f" API: [dim]{base_url}[/dim]")
    console.print("-" * 50)
    console.print(" 1. Dashboard")
    console.print(" 2. Patients")
    console.print(" 3. Doctors")
    console.print(" 4. Patient-Doctor Mappings")
    console.print(" 5. Profile & Session Status")
    console.print(" 6. Logout")
    console.print(" 7. Exit")
    console.print("=" * 50)


def display_auth_menu(console):
    """Display the login screen menu"""
    console.print("\n" + "=" * 50)
    console.print("    Sign In", style="bold")
    console.print("=" * 50)
    console.print(" 1. Login")
    console.print(" 2. Register")
    console.print(" 3. Exit")
    console.print("=" * 50)


def display_record_menu(title: str, console, extra_options=None):
    """Display the actions available for one record type

    Args:
        title: Record type title, e.g. "Patients"
        console: Rich console for output
        extra_options: Additional labels appended after the standard actions

    Returns:
        List of valid choice strings
    """
    options = ["List", "View", "Create", "Edit", "Delete"] + list(extra_options or [])

    console.print("\n" + "=" * 50)
    console.print(f"    {title}", style="bold")
    console.print("=" * 50)
    for index, label in enumerate(options, start=1):
        console.print(f" {index}. {label}")
    back = len(options) + 1
    console.print(f" {back}. Back to Main Menu")
    console.print("=" * 50)

    return [str(i) for i in range(1, back + 1)]
