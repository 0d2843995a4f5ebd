"""
Clause Builder - Builds keyword search WHERE fragments with bound parameters
"""

import re
from typing import Dict, Any, List, Optional, Tuple, Union

import structlog

from keyword_search.fragments import BoundClause, TokenClause, SQLLiteral, ValueRef
from keyword_search.options import OptionsValidator, SearchOptions, ConfigurationError, get_options_validator, is_column_sequence

logger = structlog.get_logger(__name__)

KEYWORD_SEPARATORS = re.compile(r'[\s,;:]+')

# POSIX word boundaries as understood by PostgreSQL and MySQL < 8.0.4
WORD_START = '(^|[[:<:]])'
WORD_END = '([[:>:]]|$)'

ClauseResult = Union[BoundClause, TokenClause]


def split_keywords(keywords: str) -> List[str]:
    """Split on runs of whitespace, commas, semicolons and colons, dropping empty tokens"""
    return [word for word in KEYWORD_SEPARATORS.split(keywords) if word]


def whole_word_pattern(word: str) -> str:
    """Anchor a keyword to word boundaries (regex metacharacters are not escaped)"""
    return WORD_START + word + WORD_END


class KeywordClauseBuilder:
    """Builds case-insensitive multi-keyword, multi-column search clauses"""

    def __init__(self, validator: Optional[OptionsValidator] = None):
        """
        Initialize builder

        Args:
            validator: Options validator (defaults to the bundled schema)
        """
        self.validator = validator or get_options_validator()

    def build(self, keywords: Any = None, columns: Any = None, **options) -> ClauseResult:
        """
        Build search clause

        Args:
            keywords: Comma, space, semicolon or colon separated keywords
            columns: Columns to search, used verbatim
            **options: every_column, every_word, whole_word, operator, interp

        Returns:
            BoundClause, or TokenClause when interp=True

        Raises:
            ConfigurationError: If parameters are missing, mistyped or unknown
        """
        return self.build_from_params(self._collect_params(keywords, columns, options))

    def _collect_params(self, keywords: Any, columns: Any, options: Dict[str, Any]) -> Dict[str, Any]:
        """Leave out missing arguments so the schema reports them as required"""
        params = dict(options)
        if keywords is not None:
            params['keywords'] = keywords
        if columns is not None:
            params['columns'] = columns
        return params

    def build_from_params(self, params: Dict[str, Any]) -> ClauseResult:
        """Build search clause from a complete parameter mapping"""
        keywords, columns, options = self.validator.resolve(params)
        words = split_keywords(keywords)

        fragments = self._render(words, columns, options)

        if options.interp:
            result = TokenClause(fragments=tuple(fragments))
        else:
            result = TokenClause(fragments=tuple(fragments)).to_bound()

        logger.debug(
            "keyword_clause_built",
            keyword_count=len(words),
            column_count=len(columns),
            mode='tokens' if options.interp else 'bound',
            placeholders=len(words) * len(columns),
        )
        return result

    def _render(self, words: List[str], columns: List[str], options: SearchOptions) -> list:
        """Emit literal and value fragments in output order"""
        fragments = [SQLLiteral("(\n")]

        for j, word in enumerate(words):
            if options.whole_word:
                word = whole_word_pattern(word)

            fragments.append(SQLLiteral("("))
            for i, column in enumerate(columns):
                fragments.append(SQLLiteral(f"lower({column}) {options.operator} lower("))
                fragments.append(ValueRef(word))
                fragments.append(SQLLiteral(")\n"))
                if i != len(columns) - 1:
                    fragments.append(SQLLiteral(options.column_joiner))
            fragments.append(SQLLiteral(")"))

            if j != len(words) - 1:
                fragments.append(SQLLiteral(options.word_joiner))

        fragments.append(SQLLiteral("\n)\n"))
        return fragments

    def build_safe(self, keywords: Any = None, columns: Any = None, **options) -> Tuple[bool, Optional[ClauseResult], List[str]]:
        """
        Safely build clause (doesn't raise configuration errors)

        Returns:
            Tuple of (success, result_or_none, errors)
        """
        params = self._collect_params(keywords, columns, options)

        try:
            return (True, self.build_from_params(params), [])
        except ConfigurationError as e:
            return (False, None, list(e.errors))

    def preview(self, keywords: Any = None, columns: Any = None, **options) -> Dict[str, Any]:
        """
        Describe what a build would produce

        Returns:
            Preview dictionary with parsed keywords, resolved options and the clause
        """
        success, result, errors = self.build_safe(keywords, columns, **options)

        preview = {
            'is_valid': success,
            'validation_errors': errors,
            'keywords': split_keywords(keywords) if isinstance(keywords, str) else None,
            'columns': list(columns) if is_column_sequence(columns) else None,
        }

        if not success:
            preview['options'] = None
            preview['mode'] = None
            preview['sql'] = None
            preview['values'] = None
            preview['placeholder_count'] = None
            return preview

        bound = result.to_bound() if isinstance(result, TokenClause) else result
        resolved = SearchOptions(**options)
        preview['options'] = resolved.to_dict()
        preview['mode'] = 'tokens' if resolved.interp else 'bound'
        preview['sql'] = bound.sql
        preview['values'] = list(bound.values)
        preview['placeholder_count'] = bound.placeholder_count
        return preview


_default_builder: Optional[KeywordClauseBuilder] = None


def sql_keyword_search(**params) -> ClauseResult:
    """
    Build SQL for a simple keyword search

        sql, values = sql_keyword_search(
            keywords='cat,brown',
            columns=['pets', 'colors'],
        )
        query = "SELECT title FROM articles WHERE user_id = 5 AND " + sql

    Pass interp=True for a TokenClause that an interpolation helper can
    splice into a larger statement.

    Each build emits a keyword_clause_built debug event through structlog.
    structlog prints debug events to stdout until the application configures
    it, for example with
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(logging.INFO)).

    Raises:
        ConfigurationError: If keywords/columns are missing or malformed, or an option is unknown
    """
    global _default_builder
    if _default_builder is None:
        _default_builder = KeywordClauseBuilder()
    return _default_builder.build_from_params(params)


__all__ = [
    'KeywordClauseBuilder',
    'sql_keyword_search',
    'split_keywords',
    'whole_word_pattern',
    'ClauseResult',
]
