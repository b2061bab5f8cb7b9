"""Expression normalization and ligand-receptor interaction analysis.

Stages, run in order by run_analysis():
1. select_representative_transcripts: one transcript per gene (max expression)
2. normalize_expressions: trimmed-sum rescaling per cancer/stromal category
3. aggregate_interactions: most-expressed gene per interaction role
4. compute_interaction_metrics: averages, ratios, ligand possession
"""

from interactome_pipeline.analysis.context import AnalysisContext
from interactome_pipeline.analysis.models import METRIC_FIELDS, InteractionResult
from interactome_pipeline.analysis.selector import select_representative_transcripts
from interactome_pipeline.analysis.normalize import (
    CategoryNormalization,
    normalize_category,
    normalize_expressions,
    scaling_total,
    trimmed_sum,
)
from interactome_pipeline.analysis.aggregate import (
    aggregate_interactions,
    select_role_gene,
)
from interactome_pipeline.analysis.metrics import (
    compute_interaction_metrics,
    receptor_sharing_sums,
)
from interactome_pipeline.analysis.pipeline import AnalysisResult, run_analysis

__all__ = [
    "AnalysisContext",
    "METRIC_FIELDS",
    "InteractionResult",
    "select_representative_transcripts",
    "CategoryNormalization",
    "normalize_category",
    "normalize_expressions",
    "scaling_total",
    "trimmed_sum",
    "aggregate_interactions",
    "select_role_gene",
    "compute_interaction_metrics",
    "receptor_sharing_sums",
    "AnalysisResult",
    "run_analysis",
]
