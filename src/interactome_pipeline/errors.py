"""Exception types raised by the interactome pipeline."""


class InteractomeError(Exception):
    """Base class for pipeline errors."""


class ConfigurationIntegrityError(InteractomeError):
    """Reference data and sample inputs do not agree.

    Raised when a gene or transcript id referenced by the reference database
    has no matching sample record, or a gene has no transcript variants.
    No partial result is meaningful after this error.
    """


class ReferenceFormatError(InteractomeError):
    """A reference or sample table is malformed (missing columns, bad values)."""
