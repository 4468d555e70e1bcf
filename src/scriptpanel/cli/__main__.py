"""Main entry point for scriptpanel CLI when run as a module."""

from scriptpanel.cli.main import main

if __name__ == "__main__":  # pragma: no cover
    main()
