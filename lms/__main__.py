"""Module entrypoint for `python -m lms`."""

import sys

from .main import main as main_entry


def main() -> None:
    """Run the LMS."""
    sys.exit(main_entry())


if __name__ == "__main__":  # pragma: no cover
    main()
