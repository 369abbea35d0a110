# Licensed under the Apache License, Version 2.0


class BlameRankError(Exception):
    """Base exception for domain-specific errors."""


class InvalidRecord(BlameRankError):
    """An attribution record with a non-positive line count or start line."""


class EmptyInput(BlameRankError):
    """No attribution records at all (the file has no history)."""


class ConfigurationError(BlameRankError):
    """Bad CLI args or unusable config."""


class InvalidWeight(ConfigurationError):
    """Weight string that is not one to four non-negative reals."""


class InvalidLineRange(ConfigurationError):
    """Line filter that is not '<start>-<end>' with 1 <= start <= end."""


class BlameSourceError(BlameRankError):
    """The version-control blame call failed or the path is not tracked."""


class BlameParseError(BlameSourceError):
    """Porcelain blame output that could not be parsed."""
