"""
Clause Fragments - Result types for string and token output modes
"""

from dataclasses import dataclass, field
from typing import Any, Iterator, List, Tuple, Union


@dataclass(frozen=True)
class SQLLiteral:
    """Literal SQL text, concatenated as-is"""
    text: str

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class ValueRef:
    """Value to be bound in place of a placeholder"""
    value: Any


Fragment = Union[SQLLiteral, ValueRef]


@dataclass(frozen=True)
class BoundClause:
    """
    SQL with positional '?' placeholders and bind values in placeholder order

    Unpacks like the tuple it stands for:

        sql, values = sql_keyword_search(keywords='cat', columns=['pets'])
    """
    sql: str
    values: Tuple[Any, ...] = ()

    def __iter__(self) -> Iterator[Any]:
        return iter((self.sql, list(self.values)))

    @property
    def placeholder_count(self) -> int:
        return len(self.values)


@dataclass(frozen=True)
class TokenClause:
    """Ordered literal/value fragments for an interpolation consumer"""
    fragments: Tuple[Fragment, ...] = field(default_factory=tuple)

    def __iter__(self) -> Iterator[Fragment]:
        return iter(self.fragments)

    def __len__(self) -> int:
        return len(self.fragments)

    @property
    def values(self) -> List[Any]:
        """Referenced values in order of appearance"""
        return [f.value for f in self.fragments if isinstance(f, ValueRef)]

    def skeleton(self, placeholder: str = '?') -> str:
        """Render literal SQL with each value reference replaced by placeholder"""
        return ''.join(
            placeholder if isinstance(f, ValueRef) else f.text
            for f in self.fragments
        )

    def to_bound(self) -> BoundClause:
        """Equivalent string-mode result"""
        return BoundClause(sql=self.skeleton(), values=tuple(self.values))
