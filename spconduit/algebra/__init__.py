"""Operators, monoids and semirings parameterising the bulk operations."""

from .operators import (
    ABS,
    ADDITIVE_INVERSE,
    ARITHMETIC,
    DIV,
    EQUAL,
    FIRST,
    GREATER_EQUAL,
    GREATER_THAN,
    IDENTITY,
    LESS_EQUAL,
    LESS_THAN,
    LOGICAL,
    LOGICAL_AND,
    LOGICAL_AND_MONOID,
    LOGICAL_NOT,
    LOGICAL_OR,
    LOGICAL_OR_MONOID,
    LOGICAL_XOR,
    MAX,
    MAX_MONOID,
    MAX_PLUS,
    MAX_SELECT2ND,
    MIN,
    MIN_MONOID,
    MIN_PLUS,
    MIN_SELECT2ND,
    MINUS,
    MULTIPLICATIVE_INVERSE,
    NOT_EQUAL,
    PLUS,
    PLUS_MONOID,
    SECOND,
    TIMES,
    TIMES_MONOID,
    BinaryOp,
    Monoid,
    Semiring,
    UnaryOp,
    select_in_range,
)

__all__ = [
    "UnaryOp",
    "BinaryOp",
    "Monoid",
    "Semiring",
    "IDENTITY",
    "ABS",
    "ADDITIVE_INVERSE",
    "MULTIPLICATIVE_INVERSE",
    "LOGICAL_NOT",
    "select_in_range",
    "PLUS",
    "MINUS",
    "TIMES",
    "DIV",
    "MIN",
    "MAX",
    "FIRST",
    "SECOND",
    "LOGICAL_OR",
    "LOGICAL_AND",
    "LOGICAL_XOR",
    "EQUAL",
    "NOT_EQUAL",
    "LESS_THAN",
    "LESS_EQUAL",
    "GREATER_THAN",
    "GREATER_EQUAL",
    "PLUS_MONOID",
    "TIMES_MONOID",
    "MIN_MONOID",
    "MAX_MONOID",
    "LOGICAL_OR_MONOID",
    "LOGICAL_AND_MONOID",
    "ARITHMETIC",
    "MIN_PLUS",
    "MAX_PLUS",
    "MIN_SELECT2ND",
    "MAX_SELECT2ND",
    "LOGICAL",
]
