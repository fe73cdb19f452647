"""Templated CV rendering with multi-format export."""

__version__ = "0.1.0"


def main() -> int:
    """Entry point for the application.

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    from cv_studio.cli import main as cli_main

    return cli_main()
