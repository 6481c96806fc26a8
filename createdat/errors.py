class FormatError(ValueError):
    """Raised for an invalid or unsupported date pattern token."""


class PlanError(ValueError):
    """Raised when no rename plan can be built (e.g. nothing left after filtering)."""


class MetadataError(OSError):
    """Raised by a timestamp strategy that cannot read a file's metadata."""


class TargetFolderError(OSError):
    """Raised when the target folder cannot be created."""
