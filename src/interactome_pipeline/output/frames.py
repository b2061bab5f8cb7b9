"""Convert per-sample analysis state into polars tables."""

import polars as pl

from interactome_pipeline.analysis.models import METRIC_FIELDS, InteractionResult
from interactome_pipeline.reference.models import (
    CANCER_CATEGORY,
    INTERACTION_ROLES,
    STROMAL_CATEGORY,
    ReferenceDB,
)
from interactome_pipeline.sample.models import SampleInput

GENE_SCHEMA = {
    "entrez_id": pl.Utf8,
    "symbol": pl.Utf8,
    "category": pl.Utf8,
    "representative_refseq": pl.Utf8,
    "representative_expression": pl.Float64,
    "normalized_expression": pl.Float64,
}


def gene_expression_to_frame(reference: ReferenceDB, sample: SampleInput) -> pl.DataFrame:
    """
    Build one row per reference gene with representative and normalized expression.

    category is NULL for genes outside both normalization categories.
    """
    categories = {entrez_id: CANCER_CATEGORY for entrez_id in reference.cancer_entrez_ids}
    categories.update({entrez_id: STROMAL_CATEGORY for entrez_id in reference.stromal_entrez_ids})

    rows = []
    for entrez_id, gene in reference.gene_db.items():
        ginput = sample.gene_inputs.get(entrez_id)
        refseq = ginput.representative_refseq if ginput else None
        rows.append({
            "entrez_id": entrez_id,
            "symbol": gene.symbol,
            "category": categories.get(entrez_id),
            "representative_refseq": refseq.refseq_id if refseq else None,
            "representative_expression": ginput.representative_expression if ginput else None,
            "normalized_expression": ginput.normalized_expression if ginput else None,
        })

    return pl.DataFrame(rows, schema=GENE_SCHEMA)


def interaction_schema() -> dict:
    schema = {
        "interaction_id": pl.Utf8,
        "ligand_symbol": pl.Utf8,
        "receptor_symbol": pl.Utf8,
        "valid_cancer_to_stroma": pl.Boolean,
        "valid_stroma_to_cancer": pl.Boolean,
    }
    for role in INTERACTION_ROLES:
        schema[f"{role}_entrez_id"] = pl.Utf8
        schema[f"{role}_expression"] = pl.Float64
    for metric in METRIC_FIELDS:
        schema[metric] = pl.Float64
    schema["missing_roles"] = pl.Utf8
    return schema


def interaction_results_to_frame(
    reference: ReferenceDB,
    results: dict[str, InteractionResult],
) -> pl.DataFrame:
    """
    Build one row per interaction with selected genes and metrics.

    Unset selections and metrics are NULL; missing_roles is a ';'-joined
    list of unset roles (NULL when all roles were selected).
    """
    rows = []
    for interaction in reference.interactions:
        result = results.get(interaction.interaction_id)
        row = {
            "interaction_id": interaction.interaction_id,
            "ligand_symbol": interaction.ligand_symbol,
            "receptor_symbol": interaction.receptor_symbol,
            "valid_cancer_to_stroma": interaction.valid_cancer_to_stroma,
            "valid_stroma_to_cancer": interaction.valid_stroma_to_cancer,
        }
        for role in INTERACTION_ROLES:
            ginput = result.selection(role) if result else None
            row[f"{role}_entrez_id"] = ginput.entrez_id if ginput else None
            row[f"{role}_expression"] = ginput.normalized_expression if ginput else None
        for metric in METRIC_FIELDS:
            row[metric] = getattr(result, metric) if result else None
        row["missing_roles"] = ";".join(result.missing_roles) if result and result.missing_roles else None
        rows.append(row)

    return pl.DataFrame(rows, schema=interaction_schema())
