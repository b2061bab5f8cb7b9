"""Interaction metrics: directional averages, ligand/receptor ratios and ligand possession.

For an interaction with selected normalized expressions
lc (ligand, cancer), ls (ligand, stroma), rc (receptor, cancer), rs (receptor, stroma):

- cancer -> stroma average:  sqrt(lc * rs)       (if valid_cancer_to_stroma)
- stroma -> cancer average:  sqrt(ls * rc)       (if valid_stroma_to_cancer)
- ligand ratio (cancer):     lc / (lc + ls)      (either direction valid)
- receptor ratio (stroma):   rs / (rc + rs)      (if rc + rs > 0)
- ligand possession:         (lc + ls) / S       (if S > 0)

S is the sum of lc + ls over every interaction sharing the receptor symbol.
"""

import math
from collections import defaultdict

import structlog

from interactome_pipeline.analysis.context import AnalysisContext
from interactome_pipeline.analysis.models import InteractionResult
from interactome_pipeline.reference.models import INTERACTION_ROLES

logger = structlog.get_logger(__name__)


def _divide(numerator: float, denominator: float) -> float:
    # IEEE semantics instead of ZeroDivisionError
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)
    return numerator / denominator


def _sqrt(value: float) -> float:
    if value < 0:
        return math.nan
    return math.sqrt(value)


def receptor_sharing_sums(
    context: AnalysisContext,
    results: dict[str, InteractionResult],
) -> dict[str, float]:
    """
    Total ligand expression per receptor symbol.

    Each interaction adds its cancer then stroma ligand expression, in
    reference order, so the totals match a pairwise scan over all
    interactions. Unset ligand selections add nothing.

    Returns:
        Dict of receptor_symbol -> summed ligand normalized expression
    """
    sums: dict[str, float] = defaultdict(float)
    for interaction in context.reference.interactions:
        result = results[interaction.interaction_id]
        total = sums[interaction.receptor_symbol]
        if result.ginput_ligand_cancer is not None:
            total += result.ginput_ligand_cancer.normalized_expression
        if result.ginput_ligand_stroma is not None:
            total += result.ginput_ligand_stroma.normalized_expression
        sums[interaction.receptor_symbol] = total
    return dict(sums)


def compute_interaction_metrics(
    context: AnalysisContext,
    results: dict[str, InteractionResult],
) -> list[str]:
    """
    Compute metrics for every interaction with all four roles selected.

    Interactions with an unset selection are skipped: their metric fields
    stay None and missing_roles names the unset roles. Other interactions
    are processed normally.

    Args:
        context: Run context
        results: Output of aggregate_interactions (updated in place)

    Returns:
        interaction_ids that were skipped
    """
    sharing_sums = receptor_sharing_sums(context, results)
    skipped = []

    for interaction in context.reference.interactions:
        result = results[interaction.interaction_id]

        missing = tuple(role for role in INTERACTION_ROLES if result.selection(role) is None)
        result.missing_roles = missing
        if missing:
            skipped.append(interaction.interaction_id)
            logger.warning(
                "interaction_metrics_skipped",
                interaction_id=interaction.interaction_id,
                receptor_symbol=interaction.receptor_symbol,
                missing_roles=list(missing),
            )
            continue

        exp_lig_cancer = result.ginput_ligand_cancer.normalized_expression
        exp_rec_cancer = result.ginput_receptor_cancer.normalized_expression
        exp_lig_stroma = result.ginput_ligand_stroma.normalized_expression
        exp_rec_stroma = result.ginput_receptor_stroma.normalized_expression

        sum_for_same_receptor = sharing_sums[interaction.receptor_symbol]

        if interaction.valid_cancer_to_stroma:
            result.average_cancer2stroma = _sqrt(exp_lig_cancer * exp_rec_stroma)
            result.ligand_ratio_cancer = _divide(exp_lig_cancer, exp_lig_cancer + exp_lig_stroma)
            result.ligand_ratio_stroma = 1.0 - result.ligand_ratio_cancer
        if interaction.valid_stroma_to_cancer:
            result.average_stroma2cancer = _sqrt(exp_lig_stroma * exp_rec_cancer)
            # Same ligand ratio as above; either direction alone must set it
            result.ligand_ratio_cancer = _divide(exp_lig_cancer, exp_lig_cancer + exp_lig_stroma)
            result.ligand_ratio_stroma = 1.0 - result.ligand_ratio_cancer

        if sum_for_same_receptor > 0:
            result.ligand_posession_for_same_receptor = (
                (exp_lig_cancer + exp_lig_stroma) / sum_for_same_receptor
            )

        if exp_rec_cancer + exp_rec_stroma > 0:
            result.receptor_ratio_stroma = exp_rec_stroma / (exp_rec_cancer + exp_rec_stroma)
            result.receptor_ratio_cancer = 1.0 - result.receptor_ratio_stroma

    logger.info(
        "compute_interaction_metrics_complete",
        interaction_count=len(results),
        skipped_count=len(skipped),
        receptor_count=len(sharing_sums),
    )

    return skipped
