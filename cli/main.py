"""CLI entry point and argument parsing"""

import argparse
from rich.console import Console

import settings
from cli.cli_app import HospitalAdminCLI
from cli.status_display import show_session_status


console = Console()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Hospital records admin CLI")
    parser.add_argument("--debug", "-d", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--base-url",
        "-u",
        default=None,
        help=f"Override API base URL (default: {settings.API_BASE_URL})"
    )
    parser.add_argument(
        "--session-file",
        default=None,
        help=f"Override session file location (default: {settings.SESSION_FILE})"
    )
    parser.add_argument(
        "--status",
        action="store_true",
        help="Show the stored session status and exit"
    )
    parser.add_argument(
        "--logout",
        action="store_true",
        help="Clear the stored session and exit"
    )
    return parser


def main(argv=None):
    """Entry point for the CLI"""
    args = build_parser().parse_args(argv)

    try:
        cli = HospitalAdminCLI(
            debug=args.debug,
            base_url=args.base_url,
            session_file=args.session_file,
        )

        if args.logout or args.status:
            if args.logout:
                cli.auth.logout()
                cli.console.print("[green]✓ Session cleared[/green]")
            if args.status:
                show_session_status(cli.store, cli.console, cli.store.session_file)
            cli.shutdown()
            return

        cli.run()

    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        console.print("Goodbye!")
    except Exception as e:
        console.print(f"\n[red]Fatal error:[/red] {e}")
        if args.debug:
            import traceback
            traceback.print_exc()
        raise SystemExit(1)


if __name__ == "__main__":
    main()
