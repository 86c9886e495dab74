"""
Convenience entry point for running slotcalendar directly.

Usage: python -m slotcalendar [command] [options]
"""

from .cli.app import app

if __name__ == "__main__":
    app()
