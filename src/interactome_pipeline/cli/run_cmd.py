"""Run command: analyze one sample's bias-corrected expression.

Pipeline steps:
1. Load config and reference database
2. Load per-transcript true_expression
3. Select representative transcripts and normalize per category
4. Aggregate interaction roles and compute interaction metrics
5. Write gene and interaction tables with provenance
"""

import logging
import sys
from pathlib import Path

import click

from interactome_pipeline.analysis import AnalysisContext, run_analysis
from interactome_pipeline.config.loader import load_config
from interactome_pipeline.output import (
    gene_expression_to_frame,
    interaction_results_to_frame,
    write_analysis_output,
)
from interactome_pipeline.persistence import ProvenanceTracker
from interactome_pipeline.reference import load_reference_db
from interactome_pipeline.sample import SampleInput, load_true_expression

logger = logging.getLogger(__name__)


@click.command('run')
@click.option(
    '--expression',
    'expression_path',
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='TSV of bias-corrected expression (refseq_id, true_expression)'
)
@click.option(
    '--sample-id',
    default=None,
    help='Sample label for output files (default: expression file stem)'
)
@click.option(
    '--output-dir',
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help='Output directory (default: output_dir from config)'
)
@click.option(
    '--allow-degenerate',
    is_flag=True,
    help='Write results even if a category could not be normalized (all-zero expression)'
)
@click.pass_context
def run(ctx, expression_path, sample_id, output_dir, allow_degenerate):
    """Normalize expression and score ligand-receptor interactions for one sample.

    Examples:

        interactome-pipeline run --expression sample1.true_expression.tsv

        interactome-pipeline run --expression s1.tsv --sample-id S1 --output-dir results/
    """
    config_path = ctx.obj['config_path']
    sample_id = sample_id or expression_path.name.split('.')[0]

    click.echo(click.style("=== Interactome Analysis ===", bold=True))
    click.echo()

    try:
        # Load config
        click.echo("Loading configuration...")
        config = load_config(config_path)
        output_dir = output_dir or config.output_dir
        provenance = ProvenanceTracker.from_config(config, sample_id)
        click.echo(click.style(f"  Config loaded: {config_path}", fg='green'))
        click.echo()

        # Step 1: Reference database
        click.echo(click.style("Step 1: Loading reference database...", bold=True))
        reference = load_reference_db(
            config.reference.genes_path,
            config.reference.categories_path,
            config.reference.interactions_path,
        )
        click.echo(click.style(
            f"  {len(reference.gene_db)} genes, {len(reference.interactions)} interactions "
            f"(cancer: {len(reference.cancer_entrez_ids)}, "
            f"stromal: {len(reference.stromal_entrez_ids)})",
            fg='green'
        ))
        click.echo()
        provenance.record_step('load_reference_db', {
            'gene_count': len(reference.gene_db),
            'interaction_count': len(reference.interactions),
        })

        # Step 2: Sample expression
        click.echo(click.style("Step 2: Loading corrected expression...", bold=True))
        true_expressions = load_true_expression(expression_path)
        sample = SampleInput.from_reference(reference, sample_id, true_expressions)
        click.echo(click.style(
            f"  {len(true_expressions)} transcripts for sample {sample_id}",
            fg='green'
        ))
        click.echo()
        provenance.record_step('load_true_expression', {
            'sample_id': sample_id,
            'transcript_count': len(true_expressions),
        })

        # Step 3: Analysis
        click.echo(click.style("Step 3: Normalizing and scoring interactions...", bold=True))
        context = AnalysisContext(
            reference=reference,
            sample=sample,
            settings=config.normalization,
        )
        result = run_analysis(context)

        if not result.success:
            click.echo(click.style(f"  Analysis failed: {result.error}", fg='red'), err=True)
            sys.exit(1)

        for normalization in result.normalizations:
            note = " (full-sum fallback)" if normalization.used_fallback else ""
            click.echo(
                f"  {normalization.category}: {normalization.gene_count} genes, "
                f"scaling sum {normalization.scaling_sum:,.2f}{note}"
            )

        if result.skipped_interactions:
            click.echo(click.style(
                f"  {len(result.skipped_interactions)} interaction(s) skipped "
                "(no qualifying gene for a role)",
                fg='yellow'
            ))

        if result.degenerate_categories:
            message = (
                "  Degenerate normalization (all-zero expression) in: "
                + ", ".join(result.degenerate_categories)
            )
            if not allow_degenerate:
                click.echo(click.style(message, fg='red'), err=True)
                click.echo("  Re-run with --allow-degenerate to write NaN results.", err=True)
                sys.exit(1)
            click.echo(click.style(message, fg='yellow'))

        click.echo(click.style("  Analysis complete", fg='green'))
        click.echo()
        provenance.record_analysis(result)

        # Step 4: Write output
        click.echo(click.style("Step 4: Writing results...", bold=True))
        paths = write_analysis_output(
            gene_expression_to_frame(reference, sample),
            interaction_results_to_frame(reference, result.results),
            output_dir=output_dir,
            filename_base=sample_id,
            normalizations=result.normalizations,
        )
        for path in paths.values():
            click.echo(f"  {path}")
        provenance.record_step('write_analysis_output', {
            'files': [path.name for path in paths.values()],
        })
        provenance_path = provenance.save_sidecar(output_dir)
        click.echo(f"  {provenance_path}")
        click.echo()

        click.echo(click.style("Analysis pipeline complete!", fg='green', bold=True))

    except Exception as e:
        click.echo(click.style(f"Run command failed: {e}", fg='red'), err=True)
        logger.exception("Run command failed")
        sys.exit(1)
