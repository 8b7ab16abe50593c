class ProviderError(Exception):
    """Base exception for originality provider failures."""


class ProviderAuthError(ProviderError):
    """Raised when credentials are missing or rejected by the provider."""


class ProviderNetworkError(ProviderError):
    """Raised when the provider cannot be reached or answers with an error status."""


class ProviderTimeoutError(ProviderNetworkError):
    """Raised when the provider does not answer within the configured timeout."""


class ProviderMalformedResponseError(ProviderError):
    """Raised when the provider answers with a payload that cannot be parsed."""
