"""Per-sample expression records filled in by the analysis stages."""

from dataclasses import dataclass, field

from interactome_pipeline.reference.models import ReferenceDB, Variant


@dataclass
class RefseqInput:
    """Bias-corrected expression of one transcript (read-only for the analysis)."""

    refseq_id: str
    true_expression: float


@dataclass
class GeneInput:
    """
    Per-sample expression state of one gene.

    Attributes:
        entrez_id: Entrez gene ID
        representative_refseq: Variant chosen to represent the gene
        representative_expression: true_expression of that variant
        normalized_expression: Category-rescaled expression. Stays None for
            genes outside the cancer and stromal categories; NaN when the
            category could not be normalized.
    """

    entrez_id: str
    representative_refseq: Variant | None = None
    representative_expression: float | None = None
    normalized_expression: float | None = None


@dataclass
class SampleInput:
    """Expression store for a single sample, keyed by gene and transcript IDs."""

    sample_id: str
    gene_inputs: dict[str, GeneInput] = field(default_factory=dict)
    refseq_inputs: dict[str, RefseqInput] = field(default_factory=dict)

    @classmethod
    def from_reference(
        cls,
        reference: ReferenceDB,
        sample_id: str,
        true_expressions: dict[str, float],
    ) -> "SampleInput":
        """
        Create an input store with a GeneInput for every reference gene.

        Args:
            reference: Reference database defining the gene set
            sample_id: Sample label carried into outputs
            true_expressions: RefSeq ID -> bias-corrected expression

        Returns:
            SampleInput ready for representative-transcript selection
        """
        gene_inputs = {
            entrez_id: GeneInput(entrez_id=entrez_id)
            for entrez_id in reference.gene_db
        }
        refseq_inputs = {
            refseq_id: RefseqInput(refseq_id=refseq_id, true_expression=float(value))
            for refseq_id, value in true_expressions.items()
        }
        return cls(
            sample_id=sample_id,
            gene_inputs=gene_inputs,
            refseq_inputs=refseq_inputs,
        )
