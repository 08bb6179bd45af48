"""
Shared CLI Option Decorators

Reusable Click decorators for the options common to mediaflow subcommands.
"""

import click

from .help_texts import CONFIG_HELP, LOG_LEVEL_HELP


def input_option(help=None):
    """Decorator for the pipeline document option."""
    def decorator(f):
        return click.option(
            '--input', '-i',
            'input_path',
            required=True,
            type=click.Path(dir_okay=False),
            help=help or 'Pipeline document path'
        )(f)
    return decorator

def format_option(help=None):
    """Decorator for document format options."""
    def decorator(f):
        return click.option(
            '--format', '-f',
            'document_format',
            default=None,
            type=click.Choice(['json', 'yaml'], case_sensitive=False),
            help=help or 'Document format'
        )(f)
    return decorator

def config_option(help=None):
    """Decorator for configuration file options."""
    def decorator(f):
        return click.option(
            '--config',
            default=None,
            help=help or CONFIG_HELP
        )(f)
    return decorator

def log_level_option(help=None):
    """Decorator for logging level options."""
    def decorator(f):
        return click.option(
            '--log-level',
            default=None,
            type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
            help=help or LOG_LEVEL_HELP
        )(f)
    return decorator
