"""Trimmed-sum normalization of representative expression per gene category.

Each category (cancer, stromal) is rescaled so that the sum of its middle
90% of representative expressions equals a fixed target (300,000 reads by
default). The middle range is defined by rank index on the ascending sort:
indices i with n*lower < i <= int(n*upper). If that sum is zero the full
sum is used instead. A category whose full sum is also zero cannot be
scaled; its genes receive NaN and the category is reported as degenerate.
An empty category is left as is.
"""

import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np
import structlog

from interactome_pipeline.analysis.context import AnalysisContext
from interactome_pipeline.errors import ConfigurationIntegrityError
from interactome_pipeline.reference.models import CANCER_CATEGORY, STROMAL_CATEGORY

logger = structlog.get_logger(__name__)


@dataclass
class CategoryNormalization:
    """Summary of one category's rescaling."""

    category: str
    gene_count: int
    trimmed_sum: float
    scaling_sum: float
    used_fallback: bool
    degenerate: bool
    target_total: float = 300000.0

    @property
    def scale_factor(self) -> float:
        """Multiplier applied to representative expression (NaN if degenerate)."""
        if self.degenerate or self.scaling_sum == 0:
            return math.nan
        return self.target_total / self.scaling_sum


def trimmed_sum(
    values: Sequence[float],
    lower_fraction: float = 0.05,
    upper_fraction: float = 0.95,
) -> float:
    """
    Sum the middle ranks of the ascending-sorted values.

    Indices run downward from int(n * upper_fraction) while the index is
    strictly greater than n * lower_fraction. Small inputs can give an empty
    range (sum 0.0); e.g. a single value never contributes.

    Args:
        values: Expression values in any order
        lower_fraction: Rank fraction excluded at the bottom
        upper_fraction: Rank fraction of the top included index

    Returns:
        Sum of the selected ranks
    """
    ordered = np.sort(np.asarray(values, dtype=np.float64))
    n = len(ordered)

    total = 0.0
    i = int(n * upper_fraction)
    while i > n * lower_fraction:
        total += float(ordered[i])
        i -= 1
    return total


def scaling_total(
    values: Sequence[float],
    lower_fraction: float = 0.05,
    upper_fraction: float = 0.95,
) -> tuple[float, float, bool]:
    """
    Compute the denominator used to rescale a category.

    Returns:
        (trimmed sum, sum used for scaling, whether the full sum was used)
    """
    middle = trimmed_sum(values, lower_fraction, upper_fraction)
    if middle != 0:
        return middle, middle, False

    full = 0.0
    for value in np.sort(np.asarray(values, dtype=np.float64)):
        full += float(value)
    return middle, full, True


def normalize_category(
    context: AnalysisContext,
    category: str,
    entrez_ids: Sequence[str],
) -> CategoryNormalization:
    """
    Rescale representative expression of one category to the target total.

    Args:
        context: Run context (representative expression must already be set)
        category: Category label used in logs and the summary
        entrez_ids: Genes belonging to the category

    Returns:
        CategoryNormalization summary

    Raises:
        ConfigurationIntegrityError: If a gene has no GeneInput or no
            representative expression
    """
    settings = context.settings
    ginputs = []
    for entrez_id in entrez_ids:
        ginput = context.sample.gene_inputs.get(entrez_id)
        if ginput is None:
            raise ConfigurationIntegrityError(
                f"{category} gene {entrez_id} has no GeneInput record"
            )
        if ginput.representative_expression is None:
            raise ConfigurationIntegrityError(
                f"{category} gene {entrez_id} has no representative expression"
            )
        ginputs.append(ginput)

    expressions = [ginput.representative_expression for ginput in ginputs]
    middle, total, used_fallback = scaling_total(
        expressions, settings.lower_trim, settings.upper_trim
    )

    if used_fallback:
        logger.warning(
            "trimmed_sum_zero_fallback",
            category=category,
            gene_count=len(ginputs),
            full_sum=total,
        )

    # An empty category has nothing to rescale and is not degenerate
    degenerate = total == 0 and bool(ginputs)
    if degenerate:
        logger.error(
            "normalization_degenerate",
            category=category,
            gene_count=len(ginputs),
            msg="trimmed and full sums are zero; normalized values set to NaN",
        )
        for ginput in ginputs:
            ginput.normalized_expression = math.nan
    else:
        for ginput in ginputs:
            ginput.normalized_expression = (
                ginput.representative_expression * settings.target_total / total
            )

    logger.info(
        "normalize_category_complete",
        category=category,
        gene_count=len(ginputs),
        trimmed_sum=middle,
        scaling_sum=total,
        used_fallback=used_fallback,
    )

    return CategoryNormalization(
        category=category,
        gene_count=len(ginputs),
        trimmed_sum=middle,
        scaling_sum=total,
        used_fallback=used_fallback,
        degenerate=degenerate,
        target_total=settings.target_total,
    )


def normalize_expressions(context: AnalysisContext) -> list[CategoryNormalization]:
    """
    Normalize the cancer category, then the stromal category.

    Genes outside both categories are left with normalized_expression = None.

    Raises:
        ConfigurationIntegrityError: If a stromal transcript has no
            expression record, or a category gene cannot be resolved
    """
    reference = context.reference

    missing_refseq = [
        refseq_id
        for refseq_id in reference.stromal_refseq_ids
        if refseq_id not in context.sample.refseq_inputs
    ]
    if missing_refseq:
        raise ConfigurationIntegrityError(
            f"{len(missing_refseq)} stromal transcript(s) without expression record: "
            f"{missing_refseq[:5]}"
        )

    return [
        normalize_category(context, CANCER_CATEGORY, reference.cancer_entrez_ids),
        normalize_category(context, STROMAL_CATEGORY, reference.stromal_entrez_ids),
    ]
