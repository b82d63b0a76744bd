"""Exception hierarchy for mention detection and indexing."""


class MentionIndexError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(MentionIndexError, ValueError):
    """A configuration value is missing or not recognized."""


class ResourceLoadError(MentionIndexError, RuntimeError):
    """The lexical resource, head finder or mention finder could not be built."""


class DocumentError(MentionIndexError):
    """An error attributable to a single document."""

    def __init__(self, message: str, doc_id: str | None = None):
        self.doc_id = doc_id
        prefix = f"[{doc_id}] " if doc_id else ""
        super().__init__(f"{prefix}{message}")


class DetectionError(DocumentError, RuntimeError):
    """The mention finder failed while processing a document."""


class MissingAnnotationError(DetectionError):
    """An upstream annotation required by the finder is absent."""


class MentionAlignmentError(DocumentError, ValueError):
    """Per-sentence mention lists do not line up with the document's sentences."""


class MentionSpanError(DocumentError, ValueError):
    """A mention span falls outside its sentence's tokens."""
