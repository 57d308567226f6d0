"""CLI entry point: python -m tycoonengine <command> ..."""

from tycoonengine.cli import main

if __name__ == "__main__":
    main()
