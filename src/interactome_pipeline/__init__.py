"""Interactome pipeline: cancer-stroma ligand-receptor expression analysis."""

__version__ = "0.1.0"
