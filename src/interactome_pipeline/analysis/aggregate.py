"""Select the most-expressed gene for each ligand/receptor role of every interaction."""

from typing import Iterable

import structlog

from interactome_pipeline.analysis.context import AnalysisContext
from interactome_pipeline.analysis.models import InteractionResult
from interactome_pipeline.errors import ConfigurationIntegrityError
from interactome_pipeline.reference.models import INTERACTION_ROLES, Gene
from interactome_pipeline.sample.models import GeneInput

logger = structlog.get_logger(__name__)


def select_role_gene(
    context: AnalysisContext,
    genes: Iterable[Gene],
) -> GeneInput | None:
    """
    Return the GeneInput with the highest normalized expression among genes.

    The first gene seen wins ties. Genes without a normalized expression
    (outside both categories) do not qualify, so a role whose only
    candidates are uncategorized genes stays unset and the interaction is
    skipped by compute_interaction_metrics. They are not treated as 0.0.

    Raises:
        ConfigurationIntegrityError: If a gene has no GeneInput record
    """
    selected = None
    for gene in genes:
        ginput = context.sample.gene_inputs.get(gene.entrez_id)
        if ginput is None:
            raise ConfigurationIntegrityError(
                f"Interaction gene {gene.entrez_id} has no GeneInput record"
            )
        if ginput.normalized_expression is None:
            continue
        if selected is None or selected.normalized_expression < ginput.normalized_expression:
            selected = ginput
    return selected


def aggregate_interactions(context: AnalysisContext) -> dict[str, InteractionResult]:
    """
    Fill role selections for every interaction.

    All selections are complete before this returns, so metrics computed
    afterwards can read any interaction's selections.

    Args:
        context: Run context with normalized expression set

    Returns:
        Dict of interaction_id -> InteractionResult in reference order
    """
    results: dict[str, InteractionResult] = {}
    unset_counts = {role: 0 for role in INTERACTION_ROLES}

    for interaction in context.reference.interactions:
        result = InteractionResult(
            interaction_id=interaction.interaction_id,
            receptor_symbol=interaction.receptor_symbol,
        )
        for role, attribute in INTERACTION_ROLES.items():
            selected = select_role_gene(context, getattr(interaction, attribute))
            setattr(result, f"ginput_{role}", selected)
            if selected is None:
                unset_counts[role] += 1
        results[interaction.interaction_id] = result

    logger.info(
        "aggregate_interactions_complete",
        interaction_count=len(results),
        unset_selections=unset_counts,
    )

    return results
