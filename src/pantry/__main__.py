"""Entry point for 'python -m pantry' command."""

from pantry.cli import main

if __name__ == "__main__":
    main()
