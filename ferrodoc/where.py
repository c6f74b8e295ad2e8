"""Building SQL conditions from logical query operators and value lists."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Callable

WherePair = Callable[[str, Any, Any], "tuple[str, list[Any]]"]
Scalar = Callable[[Any, Any], "tuple[str, list[Any]]"]

_JOINERS = {"$or": " OR", "$nor": " OR", "$and": " AND"}


def logic_expr(
    op: str, exprs: Sequence[Mapping[str, Any]], placeholder: Any, where_pair: WherePair
) -> tuple[str, list[Any]]:
    """Build SQL for ``$or``, ``$and`` or ``$nor`` over a list of expression documents.

    Each key and value of each document is turned into SQL by ``where_pair``.
    """
    if op not in _JOINERS:
        raise ValueError(f"logicExpr: unhandled op {op!r}")

    sql = "NOT (" if op == "$nor" else ""
    args: list[Any] = []
    for position, expr in enumerate(exprs):
        if not isinstance(expr, Mapping):
            raise TypeError(f"logicExpr: expected a document, got {type(expr).__name__}")
        if position:
            sql += _JOINERS[op]
        for index, (key, value) in enumerate(expr.items()):
            if index:
                sql += " AND"
            expr_sql, expr_args = where_pair(key, value, placeholder)
            if sql:
                sql += " "
            sql += "(" + expr_sql + ")"
            args.extend(expr_args)

    if op == "$nor":
        sql += ")"
    return sql, args


def in_array(values: Sequence[Any], placeholder: Any, scalar: Scalar) -> tuple[str, list[Any]]:
    """Build a parenthesised, comma-separated SQL list from values."""
    parts: list[str] = []
    args: list[Any] = []
    for value in values:
        part_sql, part_args = scalar(value, placeholder)
        parts.append(part_sql)
        args.extend(part_args)
    return "(" + ", ".join(parts) + ")", args