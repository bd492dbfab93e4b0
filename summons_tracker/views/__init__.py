"""Worklist views: classification, ordering, counts, search and calendar grouping."""

from .agenda import group_by_effective_date
from .classifier import VIEW_ALIASES, ViewClassifier, ViewKind, aliases_for, classify, normalize_view
from .search import search_summons
from .sorter import sort_summons
from .stats import STAT_VIEWS, SummonsStats, compute_stats

__all__ = [
    'group_by_effective_date',
    'VIEW_ALIASES',
    'ViewClassifier',
    'ViewKind',
    'aliases_for',
    'classify',
    'normalize_view',
    'search_summons',
    'sort_summons',
    'STAT_VIEWS',
    'SummonsStats',
    'compute_stats',
]
