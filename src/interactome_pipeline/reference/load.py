"""Load the curated reference database from TSV tables."""

from pathlib import Path

import polars as pl
import structlog

from interactome_pipeline.errors import ReferenceFormatError
from interactome_pipeline.reference.models import (
    CANCER_CATEGORY,
    CATEGORY_COLUMNS,
    GENE_COLUMNS,
    INTERACTION_COLUMNS,
    INTERACTION_ROLES,
    STROMAL_CATEGORY,
    Gene,
    Interaction,
    ReferenceDB,
    Variant,
)

logger = structlog.get_logger(__name__)

GENE_LIST_SEPARATOR = ";"
TRUE_VALUES = frozenset(["1", "true", "t", "yes", "y"])
FALSE_VALUES = frozenset(["0", "false", "f", "no", "n", ""])


def read_tsv(path: Path | str, required_columns: list[str]) -> pl.DataFrame:
    """
    Read a TSV table with every column as string.

    Args:
        path: TSV file path
        required_columns: Columns that must be present

    Returns:
        DataFrame with string columns

    Raises:
        FileNotFoundError: If the file doesn't exist
        ReferenceFormatError: If a required column is missing
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Table not found: {path}")

    # IDs such as Entrez numbers must stay strings
    df = pl.read_csv(path, separator="\t", infer_schema_length=0)

    missing = [col for col in required_columns if col not in df.columns]
    if missing:
        raise ReferenceFormatError(f"{path.name}: missing column(s) {missing}")

    return df


def parse_flag(value: str | None, column: str) -> bool:
    """Parse a 0/1 or true/false style flag."""
    text = (value or "").strip().lower()
    if text in TRUE_VALUES:
        return True
    if text in FALSE_VALUES:
        return False
    raise ReferenceFormatError(f"{column}: cannot interpret {value!r} as boolean")


def split_gene_list(value: str | None) -> list[str]:
    """Split a ';'-separated Entrez ID list, dropping blanks."""
    if not value:
        return []
    return [item.strip() for item in value.split(GENE_LIST_SEPARATOR) if item.strip()]


def load_genes(genes_path: Path | str) -> dict[str, Gene]:
    """
    Build the gene database from a one-row-per-variant table.

    Variant order follows row order within each gene.

    Args:
        genes_path: TSV with columns entrez_id, symbol, refseq_id

    Returns:
        Dict of entrez_id -> Gene, in first-seen order
    """
    df = read_tsv(genes_path, ["entrez_id", "refseq_id"])
    if "symbol" not in df.columns:
        df = df.with_columns(pl.lit(None).cast(pl.Utf8).alias("symbol"))

    symbols: dict[str, str | None] = {}
    variants: dict[str, list[Variant]] = {}
    for row in df.select(GENE_COLUMNS).iter_rows(named=True):
        entrez_id = row["entrez_id"]
        if not entrez_id:
            raise ReferenceFormatError("genes table: empty entrez_id")
        symbols.setdefault(entrez_id, row["symbol"])
        gene_variants = variants.setdefault(entrez_id, [])
        if row["refseq_id"]:
            gene_variants.append(Variant(refseq_id=row["refseq_id"]))

    gene_db = {
        entrez_id: Gene(
            entrez_id=entrez_id,
            symbol=symbols[entrez_id],
            variants=tuple(gene_variants),
        )
        for entrez_id, gene_variants in variants.items()
    }

    logger.info(
        "load_genes_complete",
        gene_count=len(gene_db),
        variant_count=sum(len(g.variants) for g in gene_db.values()),
    )

    return gene_db


def load_categories(
    categories_path: Path | str,
    gene_db: dict[str, Gene],
) -> tuple[tuple[str, ...], tuple[str, ...], tuple[str, ...]]:
    """
    Load cancer and stromal category membership.

    When the table has no refseq_id values for stromal genes, the stromal
    transcript list is taken from the variants of the stromal genes.

    Returns:
        (cancer_entrez_ids, stromal_entrez_ids, stromal_refseq_ids)
    """
    df = read_tsv(categories_path, ["category", "entrez_id"])
    if "refseq_id" not in df.columns:
        df = df.with_columns(pl.lit(None).cast(pl.Utf8).alias("refseq_id"))

    cancer: list[str] = []
    stromal: list[str] = []
    stromal_refseq: list[str] = []
    for row in df.select(CATEGORY_COLUMNS).iter_rows(named=True):
        category = (row["category"] or "").strip().lower()
        if category == CANCER_CATEGORY:
            target = cancer
        elif category == STROMAL_CATEGORY:
            target = stromal
            if row["refseq_id"]:
                stromal_refseq.append(row["refseq_id"])
        else:
            raise ReferenceFormatError(f"categories table: unknown category {row['category']!r}")

        if row["entrez_id"] not in target:
            target.append(row["entrez_id"])

    if not stromal_refseq:
        stromal_refseq = [
            variant.refseq_id
            for entrez_id in stromal
            if entrez_id in gene_db
            for variant in gene_db[entrez_id].variants
        ]

    logger.info(
        "load_categories_complete",
        cancer_genes=len(cancer),
        stromal_genes=len(stromal),
        stromal_transcripts=len(stromal_refseq),
    )

    return tuple(cancer), tuple(stromal), tuple(stromal_refseq)


def load_interactions(
    interactions_path: Path | str,
    gene_db: dict[str, Gene],
) -> tuple[Interaction, ...]:
    """
    Load ligand-receptor interactions with their four role gene sets.

    Role columns hold ';'-separated Entrez IDs. IDs absent from gene_db are
    kept as bare Gene entries so that ReferenceDB.validate_integrity can
    report them.
    """
    df = read_tsv(
        interactions_path,
        [col for col in INTERACTION_COLUMNS if col != "ligand_symbol"],
    )
    if "ligand_symbol" not in df.columns:
        df = df.with_columns(pl.lit(None).cast(pl.Utf8).alias("ligand_symbol"))

    interactions = []
    for row in df.select(INTERACTION_COLUMNS).iter_rows(named=True):
        if not row["receptor_symbol"]:
            raise ReferenceFormatError(
                f"interaction {row['interaction_id']}: empty receptor_symbol"
            )
        roles = {
            attribute: tuple(
                gene_db.get(entrez_id, Gene(entrez_id=entrez_id))
                for entrez_id in split_gene_list(row[role])
            )
            for role, attribute in INTERACTION_ROLES.items()
        }
        interactions.append(
            Interaction(
                interaction_id=row["interaction_id"],
                ligand_symbol=row["ligand_symbol"],
                receptor_symbol=row["receptor_symbol"],
                valid_cancer_to_stroma=parse_flag(
                    row["valid_cancer_to_stroma"], "valid_cancer_to_stroma"
                ),
                valid_stroma_to_cancer=parse_flag(
                    row["valid_stroma_to_cancer"], "valid_stroma_to_cancer"
                ),
                **roles,
            )
        )

    logger.info(
        "load_interactions_complete",
        interaction_count=len(interactions),
        receptor_count=len({i.receptor_symbol for i in interactions}),
    )

    return tuple(interactions)


def load_reference_db(
    genes_path: Path | str,
    categories_path: Path | str,
    interactions_path: Path | str,
) -> ReferenceDB:
    """
    Load and validate the full reference database.

    Args:
        genes_path: Gene/variant table
        categories_path: Cancer/stromal category table
        interactions_path: Interaction table

    Returns:
        Validated ReferenceDB

    Raises:
        ReferenceFormatError: If a table is malformed
        ConfigurationIntegrityError: If cross-references don't resolve
    """
    gene_db = load_genes(genes_path)
    cancer, stromal, stromal_refseq = load_categories(categories_path, gene_db)
    interactions = load_interactions(interactions_path, gene_db)

    reference = ReferenceDB(
        gene_db=gene_db,
        cancer_entrez_ids=cancer,
        stromal_entrez_ids=stromal,
        stromal_refseq_ids=stromal_refseq,
        interactions=interactions,
    )
    reference.validate_integrity()

    return reference
