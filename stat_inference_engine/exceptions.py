"""Project-wide exception types."""


class StatInferenceError(Exception):
    """Base exception for all engine errors."""


class InvalidParameterError(StatInferenceError, ValueError):
    """Raised when distribution parameters or sample/interval counts are malformed."""


class NumericDegenerateError(StatInferenceError):
    """Raised when a computation would divide by zero or propagate NaN/inf."""


class UnsupportedVariantError(StatInferenceError):
    """Raised when a distribution variant reaches a code path that cannot handle it."""


class ConfigError(StatInferenceError):
    """Raised when configuration is missing or malformed."""


class ConfigValidationError(ConfigError):
    """Raised when validation fails for supplied configuration."""


class PersistenceError(StatInferenceError):
    """Base for serialization and storage failures."""


class SchemaError(PersistenceError):
    """Raised when serialized data is malformed (bad data)."""


class StorageUnavailableError(PersistenceError):
    """Raised when an artifact cannot be read or written (storage unavailable)."""
