"""Exception hierarchy for bucket-tools."""


class BucketToolsError(Exception):
    """Base exception for all bucket-tools errors."""

    pass


class ValidationError(BucketToolsError):
    """Raised when command-line arguments fail validation."""

    pass


class ConfigurationError(BucketToolsError):
    """Raised when the config file or storage client cannot be set up."""

    pass


class ListingError(BucketToolsError):
    """Raised when an object listing fails part way through."""

    pass


class DownloadError(BucketToolsError):
    """Raised when a single object cannot be fetched."""

    def __init__(self, key: str, message: str):
        super().__init__(f"{key}: {message}")
        self.key = key
