"""Load bias-corrected transcript expression produced by the upstream correction step."""

from pathlib import Path

import polars as pl
import structlog

from interactome_pipeline.errors import ReferenceFormatError

logger = structlog.get_logger(__name__)

EXPRESSION_COLUMNS = ["refseq_id", "true_expression"]


def load_true_expression(expression_path: Path | str) -> dict[str, float]:
    """
    Read per-transcript corrected expression from a TSV file.

    Args:
        expression_path: TSV with columns refseq_id, true_expression

    Returns:
        Dict of refseq_id -> true_expression in file order

    Raises:
        FileNotFoundError: If the file doesn't exist
        ReferenceFormatError: If columns are missing, values are NULL,
            non-numeric, or a refseq_id repeats
    """
    expression_path = Path(expression_path)
    if not expression_path.exists():
        raise FileNotFoundError(f"Expression table not found: {expression_path}")

    # All columns as strings; the strict cast checks every row
    df = pl.read_csv(expression_path, separator="\t", infer_schema_length=0)

    missing = [col for col in EXPRESSION_COLUMNS if col not in df.columns]
    if missing:
        raise ReferenceFormatError(f"{expression_path.name}: missing column(s) {missing}")

    try:
        df = df.select(
            pl.col("refseq_id"),
            pl.col("true_expression").cast(pl.Float64, strict=True),
        )
    except (pl.exceptions.InvalidOperationError, pl.exceptions.ComputeError) as e:
        raise ReferenceFormatError(
            f"{expression_path.name}: non-numeric true_expression ({e})"
        ) from e

    null_count = df["true_expression"].null_count() + df["refseq_id"].null_count()
    if null_count:
        raise ReferenceFormatError(f"{expression_path.name}: {null_count} NULL value(s)")

    if df["refseq_id"].n_unique() != df.height:
        raise ReferenceFormatError(f"{expression_path.name}: duplicate refseq_id rows")

    expressions = dict(zip(df["refseq_id"].to_list(), df["true_expression"].to_list()))

    logger.info(
        "load_true_expression_complete",
        path=str(expression_path),
        transcript_count=len(expressions),
    )

    return expressions
