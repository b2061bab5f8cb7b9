"""Shared synthetic reference/sample builders for analysis tests."""

import pytest

from interactome_pipeline.analysis import AnalysisContext
from interactome_pipeline.reference.models import Gene, Interaction, ReferenceDB, Variant
from interactome_pipeline.sample.models import SampleInput


@pytest.fixture
def make_interaction():
    """Factory for Interaction records with role genes given as Entrez IDs."""

    def _make(
        interaction_id,
        receptor_symbol,
        ligand_cancer=(),
        ligand_stroma=(),
        receptor_cancer=(),
        receptor_stroma=(),
        valid_cancer_to_stroma=True,
        valid_stroma_to_cancer=True,
    ):
        def genes(ids):
            return tuple(Gene(entrez_id=entrez_id) for entrez_id in ids)

        return Interaction(
            interaction_id=interaction_id,
            receptor_symbol=receptor_symbol,
            ligand_cancer=genes(ligand_cancer),
            ligand_stroma=genes(ligand_stroma),
            receptor_cancer=genes(receptor_cancer),
            receptor_stroma=genes(receptor_stroma),
            valid_cancer_to_stroma=valid_cancer_to_stroma,
            valid_stroma_to_cancer=valid_stroma_to_cancer,
        )

    return _make


@pytest.fixture
def make_context():
    """
    Factory for an AnalysisContext with one transcript (NM_<id>) per gene.

    cancer / stromal / other map Entrez ID -> true_expression. normalized
    maps Entrez ID -> normalized_expression written directly onto the
    GeneInput, for tests that start after normalization.
    """

    def _make(cancer=None, stromal=None, other=None, interactions=(), normalized=None):
        cancer = cancer or {}
        stromal = stromal or {}
        other = other or {}
        normalized = normalized or {}

        expressions = {**cancer, **stromal, **other}
        for entrez_id in normalized:
            expressions.setdefault(entrez_id, 0.0)

        gene_db = {
            entrez_id: Gene(
                entrez_id=entrez_id,
                symbol=f"SYM{entrez_id}",
                variants=(Variant(refseq_id=f"NM_{entrez_id}"),),
            )
            for entrez_id in expressions
        }
        reference = ReferenceDB(
            gene_db=gene_db,
            cancer_entrez_ids=tuple(cancer),
            stromal_entrez_ids=tuple(stromal),
            stromal_refseq_ids=tuple(f"NM_{entrez_id}" for entrez_id in stromal),
            interactions=tuple(interactions),
        )
        sample = SampleInput.from_reference(
            reference,
            "S1",
            {f"NM_{entrez_id}": value for entrez_id, value in expressions.items()},
        )
        for entrez_id, value in normalized.items():
            sample.gene_inputs[entrez_id].normalized_expression = value

        return AnalysisContext(reference=reference, sample=sample)

    return _make
