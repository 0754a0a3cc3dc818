"""
Error taxonomy for the DWG viewer services.

SourceNotFound and RenderError reach the caller; FieldExtractionError and
ScratchCopyError are absorbed inside the pipeline. DecodeError is surfaced
as a RenderError for previews and absorbed for floor plans.
"""


class DWGViewerError(Exception):
    """Base exception for viewer service failures."""

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class SourceNotFound(DWGViewerError):
    """The requested source drawing does not exist."""


class DecodeError(DWGViewerError):
    """The drawing could not be opened or parsed by the decoder."""


class FieldExtractionError(DWGViewerError):
    """A single entity lacks an expected field or it has the wrong shape."""


class ScratchCopyError(DWGViewerError):
    """The source could not be copied to the scratch directory."""


class InvalidSectionError(DWGViewerError):
    """A section key that cannot be used as part of a cache file name."""


class RenderError(DWGViewerError):
    """Decoding or rasterising a preview failed."""


class CachePersistError(RenderError):
    """The rendered preview could not be written to the cache."""
