"""Per-sample interaction results, kept apart from the reference interactions."""

from dataclasses import dataclass, field

from interactome_pipeline.sample.models import GeneInput

# Metric fields written by the metrics stage, in output column order
METRIC_FIELDS = [
    "average_cancer2stroma",
    "average_stroma2cancer",
    "ligand_ratio_cancer",
    "ligand_ratio_stroma",
    "receptor_ratio_cancer",
    "receptor_ratio_stroma",
    "ligand_posession_for_same_receptor",
]


@dataclass
class InteractionResult:
    """
    Selected genes and derived metrics for one interaction in one sample.

    Selections are None when no gene of that role qualified. Metrics are None
    when their condition does not hold (e.g. the direction is not valid) or
    when the interaction was skipped because a selection is missing; the
    skipped case is recorded in missing_roles.
    """

    interaction_id: str
    receptor_symbol: str
    ginput_ligand_cancer: GeneInput | None = None
    ginput_ligand_stroma: GeneInput | None = None
    ginput_receptor_cancer: GeneInput | None = None
    ginput_receptor_stroma: GeneInput | None = None
    average_cancer2stroma: float | None = None
    average_stroma2cancer: float | None = None
    ligand_ratio_cancer: float | None = None
    ligand_ratio_stroma: float | None = None
    receptor_ratio_cancer: float | None = None
    receptor_ratio_stroma: float | None = None
    ligand_posession_for_same_receptor: float | None = None
    missing_roles: tuple[str, ...] = field(default_factory=tuple)

    def selection(self, role: str) -> GeneInput | None:
        """Return the selected GeneInput for a role name such as 'ligand_cancer'."""
        return getattr(self, f"ginput_{role}")

    @property
    def skipped(self) -> bool:
        return bool(self.missing_roles)
