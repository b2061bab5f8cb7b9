"""Provenance tracking for pipeline runs."""

from interactome_pipeline.persistence.provenance import ProvenanceTracker

__all__ = ["ProvenanceTracker"]
