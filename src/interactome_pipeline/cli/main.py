"""Main CLI entry point for interactome-pipeline.

Provides command group with global options and subcommands for pipeline operations.
"""

import logging
from pathlib import Path

import click

from interactome_pipeline import __version__
from interactome_pipeline.config.loader import load_config
from interactome_pipeline.cli.run_cmd import run


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


@click.group()
@click.option(
    '--config',
    type=click.Path(exists=True, path_type=Path),
    default='config/default.yaml',
    help='Path to pipeline configuration YAML file'
)
@click.option(
    '--verbose',
    is_flag=True,
    help='Enable verbose logging (DEBUG level)'
)
@click.pass_context
def cli(ctx, config, verbose):
    """Interactome-pipeline: cancer-stroma ligand-receptor expression analysis.

    Normalizes bias-corrected transcript expression per gene category and
    scores ligand-receptor interactions between cancer and stroma.
    """
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config
    ctx.obj['verbose'] = verbose

    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logging.debug("Verbose logging enabled")


@cli.command()
@click.pass_context
def info(ctx):
    """Display pipeline information and configuration summary."""
    config_path = ctx.obj['config_path']

    click.echo(f"Interactome Pipeline v{__version__}")
    click.echo(f"Config: {config_path}")
    click.echo()

    try:
        config = load_config(config_path)

        config_hash = config.config_hash()
        click.echo(f"Config Hash: {config_hash[:16]}...")
        click.echo()

        click.echo(click.style("Reference Database:", bold=True))
        click.echo(f"  Version:      {config.reference.version}")
        click.echo(f"  Genes:        {config.reference.genes_path}")
        click.echo(f"  Categories:   {config.reference.categories_path}")
        click.echo(f"  Interactions: {config.reference.interactions_path}")
        click.echo()

        click.echo(click.style("Normalization:", bold=True))
        click.echo(f"  Target Total: {config.normalization.target_total:,.0f}")
        click.echo(
            f"  Trim Range:   {config.normalization.lower_trim:.0%} - "
            f"{config.normalization.upper_trim:.0%}"
        )
        click.echo()

        click.echo(click.style("Paths:", bold=True))
        click.echo(f"  Output Directory: {config.output_dir}")

    except Exception as e:
        click.echo(click.style(f"Error loading config: {e}", fg='red'), err=True)
        ctx.exit(1)


cli.add_command(run)


if __name__ == '__main__':
    cli()
