"""Exception hierarchy for the dataset reducer."""


class DatasetReducerError(ValueError):
    """Base class for all errors raised by the dataset reducer."""


class InvalidInputError(DatasetReducerError):
    """Raised when an argument violates the Record/Dataset contract."""


class ConfigError(DatasetReducerError):
    """Raised when a configuration file cannot be read or parsed."""
