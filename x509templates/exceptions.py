"""Exceptions raised by x509templates."""


class TemplateError(Exception):
    """Base class for recoverable template errors."""


class AlgorithmTypeError(TemplateError, TypeError):
    """Signature algorithm input is not a string."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"signature algorithm must be a string, got {type(value).__name__}")


class UnsupportedAlgorithmError(TemplateError, ValueError):
    """Signature algorithm name is not in the registry."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"{name} is not a supported signature algorithm")


class TemplateFormatError(TemplateError, ValueError):
    """Template format is neither JSON nor YAML."""


class RequestCreationError(TemplateError):
    """Creating or signing a certificate request failed."""

    def __init__(self, message: str, cause: Exception):
        self.cause = cause
        super().__init__(f"{message}: {cause}")


class InternalInvariantError(RuntimeError):
    """A certificate request produced by cryptography could not be parsed back.

    Not a TemplateError: callers are not expected to recover from it.
    """
