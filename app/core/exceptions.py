from typing import Any


class CipherWorkbenchError(Exception):
    """Base exception for all workbench errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(CipherWorkbenchError):
    """Raised when a startup resource or setting is unusable."""

    pass


class DictionaryLoadError(ConfigurationError):
    """Raised when the common-word list cannot be loaded."""

    def __init__(self, path: str, reason: str):
        super().__init__(
            f"Could not load common word list '{path}': {reason}",
            {"path": path, "reason": reason},
        )


class ValidationError(CipherWorkbenchError):
    """Raised when input validation fails."""

    pass


class TextTooLongError(ValidationError):
    """Raised when input text exceeds maximum length."""

    def __init__(self, length: int, max_length: int):
        super().__init__(
            f"Text length {length} exceeds maximum {max_length}",
            {"length": length, "max_length": max_length},
        )


class InvalidKeyError(ValidationError):
    """Raised when a key is not valid for the requested cipher."""

    def __init__(self, cipher: str, key: str):
        super().__init__(
            f"Key '{key}' is not valid for cipher '{cipher}'",
            {"cipher": cipher, "key": key},
        )


class KeywordTooLongError(ValidationError):
    """Raised when a keyword has more letters than a sweep allows."""

    def __init__(self, keyword: str, max_letters: int):
        super().__init__(
            f"Keyword '{keyword}' has more than {max_letters} letters",
            {"keyword": keyword, "max_letters": max_letters},
        )


class EngineError(CipherWorkbenchError):
    """Base exception for cipher engine errors."""

    pass


class EngineNotFoundError(EngineError):
    """Raised when requested cipher engine is not found."""

    def __init__(self, engine_name: str):
        super().__init__(
            f"Cipher engine '{engine_name}' not found",
            {"engine_name": engine_name},
        )


class GridLookupError(EngineError):
    """Raised when a symbol cannot be located in a cipher grid."""

    def __init__(self, symbols: str):
        super().__init__(
            f"Can't find '{symbols}' in key square",
            {"symbols": symbols},
        )


class SolverError(CipherWorkbenchError):
    """Base exception for keyword solver errors."""

    pass


class SweepAbortedError(SolverError):
    """Raised when the permutation driver reports an invalid keyword."""

    def __init__(self, keyword: str, plaintext: str):
        super().__init__(
            f"Sweep aborted: keyword '{keyword}' produced no usable plaintext",
            {"keyword": keyword, "plaintext": plaintext},
        )
