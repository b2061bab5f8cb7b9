"""Immutable reference models: genes, transcript variants and interactions."""

from pydantic import BaseModel, ConfigDict, Field

from interactome_pipeline.errors import ConfigurationIntegrityError

# Column layouts of the reference tables
GENE_COLUMNS = ["entrez_id", "symbol", "refseq_id"]
CATEGORY_COLUMNS = ["category", "entrez_id", "refseq_id"]
INTERACTION_COLUMNS = [
    "interaction_id",
    "ligand_symbol",
    "receptor_symbol",
    "ligand_cancer",
    "ligand_stroma",
    "receptor_cancer",
    "receptor_stroma",
    "valid_cancer_to_stroma",
    "valid_stroma_to_cancer",
]

CANCER_CATEGORY = "cancer"
STROMAL_CATEGORY = "stromal"

# Role name -> Interaction attribute holding the candidate genes
INTERACTION_ROLES = {
    "ligand_cancer": "ligand_cancer",
    "ligand_stroma": "ligand_stroma",
    "receptor_cancer": "receptor_cancer",
    "receptor_stroma": "receptor_stroma",
}


class Variant(BaseModel):
    """A transcript variant of a gene, identified by its RefSeq accession."""

    model_config = ConfigDict(frozen=True)

    refseq_id: str


class Gene(BaseModel):
    """Reference gene with its transcript variants in database order.

    Attributes:
        entrez_id: Entrez gene ID (unique key)
        symbol: Gene symbol (NULL if the reference table carries none)
        variants: Ordered transcript variants; order decides expression ties
    """

    model_config = ConfigDict(frozen=True)

    entrez_id: str
    symbol: str | None = None
    variants: tuple[Variant, ...] = ()


class Interaction(BaseModel):
    """One ligand-receptor relationship partitioned into cancer and stroma roles.

    Several interactions may share a receptor_symbol. The four role tuples keep
    the order of the reference table because selection ties go to the first gene.
    """

    model_config = ConfigDict(frozen=True)

    interaction_id: str
    ligand_symbol: str | None = None
    receptor_symbol: str
    ligand_cancer: tuple[Gene, ...] = ()
    ligand_stroma: tuple[Gene, ...] = ()
    receptor_cancer: tuple[Gene, ...] = ()
    receptor_stroma: tuple[Gene, ...] = ()
    valid_cancer_to_stroma: bool = False
    valid_stroma_to_cancer: bool = False


class ReferenceDB(BaseModel):
    """Curated reference database read by every analysis stage.

    Attributes:
        gene_db: Entrez ID -> Gene, in reference order
        cancer_entrez_ids: Genes normalized in the cancer category
        stromal_entrez_ids: Genes normalized in the stromal category
        stromal_refseq_ids: Transcripts belonging to stromal genes
        interactions: All interactions in reference order
    """

    model_config = ConfigDict(frozen=True)

    gene_db: dict[str, Gene] = Field(default_factory=dict)
    cancer_entrez_ids: tuple[str, ...] = ()
    stromal_entrez_ids: tuple[str, ...] = ()
    stromal_refseq_ids: tuple[str, ...] = ()
    interactions: tuple[Interaction, ...] = ()

    def validate_integrity(self) -> None:
        """
        Check cross-references inside the reference database.

        Raises:
            ConfigurationIntegrityError: If a gene has no variants, a category
                or role gene is unknown, the categories overlap, or an
                interaction_id is duplicated.
        """
        for entrez_id, gene in self.gene_db.items():
            if not gene.variants:
                raise ConfigurationIntegrityError(
                    f"Gene {entrez_id} has no transcript variants"
                )

        for name, ids in (
            (CANCER_CATEGORY, self.cancer_entrez_ids),
            (STROMAL_CATEGORY, self.stromal_entrez_ids),
        ):
            unknown = [entrez_id for entrez_id in ids if entrez_id not in self.gene_db]
            if unknown:
                raise ConfigurationIntegrityError(
                    f"{len(unknown)} {name} gene(s) missing from gene_db: {unknown[:5]}"
                )

        overlap = set(self.cancer_entrez_ids) & set(self.stromal_entrez_ids)
        if overlap:
            raise ConfigurationIntegrityError(
                f"Genes assigned to both categories: {sorted(overlap)[:5]}"
            )

        seen_ids: set[str] = set()
        for interaction in self.interactions:
            if interaction.interaction_id in seen_ids:
                raise ConfigurationIntegrityError(
                    f"Duplicate interaction_id: {interaction.interaction_id}"
                )
            seen_ids.add(interaction.interaction_id)

            for role, attribute in INTERACTION_ROLES.items():
                for gene in getattr(interaction, attribute):
                    if gene.entrez_id not in self.gene_db:
                        raise ConfigurationIntegrityError(
                            f"Interaction {interaction.interaction_id} {role} gene "
                            f"{gene.entrez_id} missing from gene_db"
                        )
