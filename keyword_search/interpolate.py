"""
Interpolation - Assembles token sequences into SQL with bind values
"""

from typing import Any, List, Tuple

from keyword_search.fragments import BoundClause, TokenClause, SQLLiteral, ValueRef
from keyword_search.options import ConfigurationError


def interpolate(*items: Any, placeholder: str = '?') -> BoundClause:
    """
    Join SQL text and value references into one statement

    Top-level items are separated by a space unless one side already
    supplies whitespace. Fragments inside a TokenClause, list or tuple are
    concatenated exactly, so a keyword clause keeps its own layout.

        sql, values = interpolate(
            "SELECT title FROM articles WHERE user_id =", ValueRef(5),
            "AND", sql_keyword_search(keywords=q, columns=['title'], interp=True),
        )

    Args:
        *items: str, SQLLiteral, ValueRef, TokenClause, or lists/tuples of those
        placeholder: Placeholder written for each value reference

    Returns:
        BoundClause with values in placeholder order

    Raises:
        ConfigurationError: If an item has an unsupported type
    """
    sql = ''
    values: List[Any] = []

    for position, item in enumerate(items):
        chunk, chunk_values = _render_item(item, placeholder, position)
        if sql and chunk and not sql[-1].isspace() and not chunk[0].isspace():
            sql += ' '
        sql += chunk
        values.extend(chunk_values)

    return BoundClause(sql=sql, values=tuple(values))


def _render_item(item: Any, placeholder: str, position: int) -> Tuple[str, List[Any]]:
    if isinstance(item, (TokenClause, list, tuple)):
        parts = []
        values = []
        for fragment in item:
            text, fragment_values = _render_fragment(fragment, placeholder, position)
            parts.append(text)
            values.extend(fragment_values)
        return ''.join(parts), values

    return _render_fragment(item, placeholder, position)


def _render_fragment(fragment: Any, placeholder: str, position: int) -> Tuple[str, List[Any]]:
    if isinstance(fragment, ValueRef):
        return placeholder, [fragment.value]
    if isinstance(fragment, SQLLiteral):
        return fragment.text, []
    if isinstance(fragment, str):
        return fragment, []
    raise ConfigurationError([
        f"Cannot interpolate item {position} of type {type(fragment).__name__}; "
        f"expected SQL text, SQLLiteral, ValueRef or TokenClause"
    ])
