"""Per-sample expression inputs.

Transcript-level true_expression values arrive from the bias-correction step;
gene-level records are filled in by the analysis stages.
"""

from interactome_pipeline.sample.models import GeneInput, RefseqInput, SampleInput
from interactome_pipeline.sample.load import load_true_expression

__all__ = [
    "GeneInput",
    "RefseqInput",
    "SampleInput",
    "load_true_expression",
]
