from .aggregate_service import AggregateService, email_identity, merge_ranges
from .scoring_service import ScoringService, parse_weights
from .rank_service import RankService, rank_key
from .ownership_service import OwnershipService, rank_records
from .report_service import ReportService


__all__ = [
    'AggregateService',
    'email_identity',
    'merge_ranges',
    'ScoringService',
    'parse_weights',
    'RankService',
    'rank_key',
    'OwnershipService',
    'rank_records',
    'ReportService',
]
