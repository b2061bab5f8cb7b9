"""Dual-format TSV+Parquet writer with YAML provenance sidecar."""

from datetime import datetime, timezone
from pathlib import Path

import polars as pl
import yaml

from interactome_pipeline.analysis.normalize import CategoryNormalization


def write_analysis_output(
    gene_df: pl.DataFrame,
    interaction_df: pl.DataFrame,
    output_dir: Path,
    filename_base: str = "sample",
    normalizations: list[CategoryNormalization] | None = None,
) -> dict:
    """
    Write gene expression and interaction tables to TSV and Parquet.

    Args:
        gene_df: Output of gene_expression_to_frame()
        interaction_df: Output of interaction_results_to_frame()
        output_dir: Directory to write output files (created if doesn't exist)
        filename_base: Base filename, usually the sample ID
        normalizations: Category summaries recorded in the sidecar

    Returns:
        Dictionary with output file paths:
        {
            "genes_tsv", "genes_parquet",
            "interactions_tsv", "interactions_parquet",
            "provenance"
        }

    Notes:
        - Genes sorted by entrez_id, interactions by interaction_id, for
          deterministic output
        - NULL is written as an empty TSV field, NaN as "NaN"
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    gene_df = gene_df.sort("entrez_id")
    interaction_df = interaction_df.sort("interaction_id")

    paths = {
        "genes_tsv": output_dir / f"{filename_base}.genes.tsv",
        "genes_parquet": output_dir / f"{filename_base}.genes.parquet",
        "interactions_tsv": output_dir / f"{filename_base}.interactions.tsv",
        "interactions_parquet": output_dir / f"{filename_base}.interactions.parquet",
        "provenance": output_dir / f"{filename_base}.provenance.yaml",
    }

    gene_df.write_csv(paths["genes_tsv"], separator="\t", include_header=True)
    gene_df.write_parquet(paths["genes_parquet"], compression="snappy")
    interaction_df.write_csv(paths["interactions_tsv"], separator="\t", include_header=True)
    interaction_df.write_parquet(paths["interactions_parquet"], compression="snappy")

    skipped = 0
    if "missing_roles" in interaction_df.columns:
        skipped = interaction_df.filter(pl.col("missing_roles").is_not_null()).height

    provenance = {
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "output_files": [
            paths[key].name
            for key in ("genes_tsv", "genes_parquet", "interactions_tsv", "interactions_parquet")
        ],
        "statistics": {
            "gene_count": gene_df.height,
            "normalized_gene_count": gene_df.filter(
                pl.col("normalized_expression").is_not_null()
            ).height,
            "interaction_count": interaction_df.height,
            "skipped_interaction_count": skipped,
        },
        "normalization": [
            {
                "category": n.category,
                "gene_count": n.gene_count,
                "trimmed_sum": n.trimmed_sum,
                "scaling_sum": n.scaling_sum,
                "used_fallback": n.used_fallback,
                "degenerate": n.degenerate,
            }
            for n in (normalizations or [])
        ],
        "interaction_columns": interaction_df.columns,
    }

    with open(paths["provenance"], "w") as f:
        yaml.dump(provenance, f, default_flow_style=False, sort_keys=False)

    return paths
