#!/usr/bin/env python
"""Command-line entry point for the Shopee AI listing service."""

import os
import sys
from pathlib import Path

from dotenv import load_dotenv


def main() -> None:
    """Load .env, then hand over to Django's management commands."""
    load_dotenv(Path(__file__).resolve().parent / ".env")
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "core.settings.development")

    from django.core.management import execute_from_command_line

    execute_from_command_line(sys.argv)


if __name__ == "__main__":
    main()
