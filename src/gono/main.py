"""Unified entry point for gono."""

from gono.interfaces.cli.app import run_cli


def main():
    """Start the interactive terminal interface."""
    run_cli()


if __name__ == "__main__":
    main()
