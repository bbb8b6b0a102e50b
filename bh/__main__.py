"""Allow running the CLI with `python -m bh`."""

from bh.cli.app import run

if __name__ == "__main__":
    run()
