from .errors import (
    BlameParseError,
    BlameRankError,
    BlameSourceError,
    ConfigurationError,
    EmptyInput,
    InvalidLineRange,
    InvalidRecord,
    InvalidWeight,
)
from .models import (
    Aggregation,
    AttributionRecord,
    AuthorAggregate,
    LineRange,
    Weights,
)

__all__ = [
    "Aggregation",
    "AttributionRecord",
    "AuthorAggregate",
    "BlameParseError",
    "BlameRankError",
    "BlameSourceError",
    "ConfigurationError",
    "EmptyInput",
    "InvalidLineRange",
    "InvalidRecord",
    "InvalidWeight",
    "LineRange",
    "Weights",
]
