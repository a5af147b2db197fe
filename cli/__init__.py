"""CLI package for the hospital admin client

This package provides the interactive terminal front end: login and
registration, dashboard, and record screens for patients, doctors and
patient-doctor mappings.
"""

from cli.cli_app import HospitalAdminCLI
from cli.main import main

__all__ = [
    "HospitalAdminCLI",
    "main",
]
