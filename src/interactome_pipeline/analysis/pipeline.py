"""Run the four analysis stages in order for one sample."""

from dataclasses import dataclass, field

import structlog

from interactome_pipeline.analysis.aggregate import aggregate_interactions
from interactome_pipeline.analysis.context import AnalysisContext
from interactome_pipeline.analysis.metrics import compute_interaction_metrics
from interactome_pipeline.analysis.models import InteractionResult
from interactome_pipeline.analysis.normalize import (
    CategoryNormalization,
    normalize_expressions,
)
from interactome_pipeline.analysis.selector import select_representative_transcripts
from interactome_pipeline.errors import ConfigurationIntegrityError

logger = structlog.get_logger(__name__)


@dataclass
class AnalysisResult:
    """
    Outcome of one pipeline run.

    success is False only for configuration-integrity failures, in which case
    error holds the message and no other field is meaningful. A degenerate
    category (all expression zero) still yields success; callers decide what
    to do from degenerate_categories.
    """

    success: bool
    error: str | None = None
    gene_count: int = 0
    normalizations: list[CategoryNormalization] = field(default_factory=list)
    results: dict[str, InteractionResult] = field(default_factory=dict)
    skipped_interactions: list[str] = field(default_factory=list)

    @property
    def degenerate_categories(self) -> list[str]:
        return [n.category for n in self.normalizations if n.degenerate]


def run_analysis(context: AnalysisContext) -> AnalysisResult:
    """
    Select representative transcripts, normalize, aggregate and score interactions.

    Stages run strictly in sequence; role selection for every interaction
    finishes before any metric is computed.

    Args:
        context: Run context holding reference, sample and settings

    Returns:
        AnalysisResult (success=False on configuration-integrity failure)
    """
    logger.info(
        "analysis_start",
        sample_id=context.sample.sample_id,
        gene_count=len(context.reference.gene_db),
        interaction_count=len(context.reference.interactions),
    )

    try:
        gene_count = select_representative_transcripts(context)
        normalizations = normalize_expressions(context)
        results = aggregate_interactions(context)
        skipped = compute_interaction_metrics(context, results)
    except ConfigurationIntegrityError as e:
        logger.error(
            "analysis_failed",
            sample_id=context.sample.sample_id,
            error=str(e),
        )
        return AnalysisResult(success=False, error=str(e))

    result = AnalysisResult(
        success=True,
        gene_count=gene_count,
        normalizations=normalizations,
        results=results,
        skipped_interactions=skipped,
    )

    logger.info(
        "analysis_complete",
        sample_id=context.sample.sample_id,
        degenerate_categories=result.degenerate_categories,
        skipped_interactions=len(skipped),
    )

    return result
