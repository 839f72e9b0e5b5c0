"""Main entry point for the readtrack package."""

from readtrack.cli import main

if __name__ == "__main__":
    main()
