"""Domain errors for trustlinker."""


class TrustLinkerError(RuntimeError):
    """Raised when trust propagation cannot continue safely."""


class ConfigurationError(TrustLinkerError):
    """Raised for invalid network registries or configuration files."""


class InvalidRequestError(TrustLinkerError):
    """Raised when contract-name arguments are missing or ambiguous."""


class SourceResolutionError(TrustLinkerError):
    """Raised when the source network cannot be found in the active set."""


class LinkFailureError(TrustLinkerError):
    """Raised when a single trust link could not be established."""

    def __init__(self, message: str, task=None, result=None):
        super().__init__(message)
        self.task = task
        self.result = result
