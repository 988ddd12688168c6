"""Entry point for `python -m themepicker`."""

import sys


def main():
    from themepicker.app import run_app
    sys.exit(run_app())


if __name__ == "__main__":
    main()
