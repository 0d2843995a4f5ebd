"""
Keyword Search Package - SQL generation for simple keyword searches
"""

from .clause_builder import KeywordClauseBuilder, sql_keyword_search, split_keywords, whole_word_pattern
from .fragments import BoundClause, TokenClause, SQLLiteral, ValueRef
from .interpolate import interpolate
from .options import SearchOptions, OptionsValidator, ConfigurationError, load_search_profile

__version__ = '1.11.0'

__all__ = [
    'sql_keyword_search',
    'KeywordClauseBuilder',
    'split_keywords',
    'whole_word_pattern',
    'BoundClause',
    'TokenClause',
    'SQLLiteral',
    'ValueRef',
    'interpolate',
    'SearchOptions',
    'OptionsValidator',
    'ConfigurationError',
    'load_search_profile',
]
