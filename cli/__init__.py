"""
CLI Package for Mediaflow

Click group with one subcommand per module.

The main entry point is the main() function which creates a Click group and
registers all available subcommands. The cli() function serves as the
console script entry point for setup.py.
"""

import os
import click
from dotenv import load_dotenv

# Load environment variables from .env files
# Priority: .env.dev (if exists) overrides .env
if os.path.exists('.env.dev'):
    load_dotenv('.env.dev')
elif os.path.exists('.env'):
    load_dotenv('.env')

from mediaflow import __version__
from .validate import validate
from .steps import steps

@click.group()
@click.version_option(version=__version__, prog_name='mediaflow')
def main():
    """Mediaflow CLI - Validate media-processing pipeline documents.

    Checks every step of a pipeline (ids, step kinds, arguments and
    references to earlier steps) before any media is touched.
    """
    pass

# Register subcommands
main.add_command(validate)
main.add_command(steps)

# Entry point for setup.py console script
def cli():
    """Console script entry point.

    This function is called when the mediaflow command is executed
    from the command line after installation via pip.
    """
    main()
