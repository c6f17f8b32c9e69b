"""Exception hierarchy for CV extraction."""


class ExtractionError(Exception):
    """Base class for errors raised by the extraction core."""


class ConfigurationError(ExtractionError):
    """Programming or deployment mistake detected before any remote call (not retryable)."""


class UnknownModelError(ConfigurationError):
    """The model identifier has no pricing entry."""

    def __init__(self, model_id: str):
        self.model_id = model_id
        super().__init__(f"Unknown model: {model_id!r}")


class DocumentUnusableError(ExtractionError):
    """The encoded document has an empty payload and cannot be sent to the model."""
