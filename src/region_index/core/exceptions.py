class RegionIndexError(Exception):
    """Base exception for region index failures."""


class RecordFormatError(RegionIndexError, ValueError):
    """Raised when an input record is malformed and cannot enter the index."""


class QueryValidationError(RegionIndexError, ValueError):
    """Raised when query input (code or name) is malformed."""


class TreeIntegrityError(RegionIndexError):
    """Raised when an ancestry walk meets a cycle or a dangling parent reference."""


class IndexBuildError(RegionIndexError):
    """Raised when a build attempt cannot complete (resource exhaustion)."""


class PipelineError(RegionIndexError):
    """Raised when the load/build pipeline fails."""
