"""
Steps Subcommand Module

Lists the step kinds registered in the default registry.
"""

from typing import Optional

import click

from mediaflow.steps import STEP_REGISTRY
from mediaflow.steps.registry import StepCategory
from mediaflow.validation.engine import iter_rule_fields

from .help_texts import STEPS_CATEGORY_HELP, STEPS_HELP


@click.command(help=STEPS_HELP)
@click.option(
    "--category", "-c",
    type=click.Choice([c.value for c in StepCategory], case_sensitive=False),
    default=None,
    help=STEPS_CATEGORY_HELP,
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Also list the argument keys of each step",
)
def steps(category: Optional[str], verbose: bool):
    """List registered step kinds and their categories."""
    selected = StepCategory(category.lower()) if category else None

    for definition in STEP_REGISTRY:
        if selected is not None and definition.category is not selected:
            continue
        click.echo(f"{definition.name:<15} {definition.category.value:<12} {definition.description}")
        if verbose:
            for key, info, _ in iter_rule_fields(definition.args_model):
                marker = "required" if info.is_required() else "optional"
                click.echo(f"    - {key} ({marker})")
