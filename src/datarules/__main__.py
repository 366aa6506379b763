"""Run the datarules CLI with ``python -m datarules``."""

from datarules.cli.main import cli

if __name__ == "__main__":
    cli()
