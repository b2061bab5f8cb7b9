"""Representative-transcript selection: one expression value per gene."""

import structlog

from interactome_pipeline.analysis.context import AnalysisContext
from interactome_pipeline.errors import ConfigurationIntegrityError

logger = structlog.get_logger(__name__)


def select_representative_transcripts(context: AnalysisContext) -> int:
    """
    Pick the most-expressed transcript variant of every reference gene.

    Variants are scanned in reference order with a strict comparison, so on a
    tie the lowest-indexed variant is kept.

    Args:
        context: Run context; writes representative_refseq and
            representative_expression on each GeneInput

    Returns:
        Number of genes processed

    Raises:
        ConfigurationIntegrityError: If a gene has no variants, a variant has
            no RefseqInput, or a gene has no GeneInput
    """
    sample = context.sample

    for entrez_id, gene in context.reference.gene_db.items():
        if not gene.variants:
            raise ConfigurationIntegrityError(f"Gene {entrez_id} has no transcript variants")

        refinputs = []
        for variant in gene.variants:
            refinput = sample.refseq_inputs.get(variant.refseq_id)
            if refinput is None:
                raise ConfigurationIntegrityError(
                    f"Transcript {variant.refseq_id} of gene {entrez_id} has no expression record"
                )
            refinputs.append(refinput)

        maximum = 0
        for i in range(1, len(refinputs)):
            if refinputs[maximum].true_expression < refinputs[i].true_expression:
                maximum = i

        geneinput = sample.gene_inputs.get(entrez_id)
        if geneinput is None:
            raise ConfigurationIntegrityError(f"Gene {entrez_id} has no GeneInput record")

        geneinput.representative_refseq = gene.variants[maximum]
        geneinput.representative_expression = refinputs[maximum].true_expression

    gene_count = len(context.reference.gene_db)
    logger.info("select_representative_transcripts_complete", gene_count=gene_count)

    return gene_count
