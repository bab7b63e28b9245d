"""Main entry point for the convoy command."""

from convoy.cli.main import app


def main():
    """Run the convoy CLI."""
    app()


if __name__ == "__main__":
    main()
