"""Curated reference database: genes, transcript variants and ligand-receptor interactions.

The reference is read-only for the analysis stages. It provides:
- gene_db: genes with their ordered RefSeq transcript variants
- cancer / stromal category membership used for normalization
- interactions with ligand and receptor candidates in each compartment
"""

from interactome_pipeline.reference.models import (
    CANCER_CATEGORY,
    INTERACTION_ROLES,
    STROMAL_CATEGORY,
    Gene,
    Interaction,
    ReferenceDB,
    Variant,
)
from interactome_pipeline.reference.load import (
    load_categories,
    load_genes,
    load_interactions,
    load_reference_db,
)

__all__ = [
    "CANCER_CATEGORY",
    "INTERACTION_ROLES",
    "STROMAL_CATEGORY",
    "Gene",
    "Interaction",
    "ReferenceDB",
    "Variant",
    "load_categories",
    "load_genes",
    "load_interactions",
    "load_reference_db",
]
