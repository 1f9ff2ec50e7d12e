"""
Entry point for ``python -m gitversion_build``.

Delegates to the Click CLI.
"""


def main():
    """Main entry point for the gitversion-build CLI."""
    from .cli import cli

    cli()


if __name__ == "__main__":
    main()
