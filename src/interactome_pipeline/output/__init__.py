"""Output generation: per-sample tables and dual-format file writing."""

from interactome_pipeline.output.frames import (
    gene_expression_to_frame,
    interaction_results_to_frame,
)
from interactome_pipeline.output.writers import write_analysis_output

__all__ = [
    "gene_expression_to_frame",
    "interaction_results_to_frame",
    "write_analysis_output",
]
