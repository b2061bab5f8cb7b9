"""Run context shared by the analysis stages."""

from dataclasses import dataclass, field

from interactome_pipeline.config.schema import NormalizationSettings
from interactome_pipeline.reference.models import ReferenceDB
from interactome_pipeline.sample.models import SampleInput


@dataclass
class AnalysisContext:
    """References to the reference database, the sample store and settings.

    Built once per run and handed to each stage in order.
    """

    reference: ReferenceDB
    sample: SampleInput
    settings: NormalizationSettings = field(default_factory=NormalizationSettings)
