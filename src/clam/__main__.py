"""Run clam with ``python -m clam``."""

from clam.cli.app import app

if __name__ == "__main__":
    app()
