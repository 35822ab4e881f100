"""
Index pattern matching as Elasticsearch resolves multi-target expressions.

A pattern is a comma separated list of index names where ``*`` is the only
wildcard (``?`` and ``[...]`` are literal). An entry prefixed with ``-`` that
follows another entry excludes the indices it matches.
"""
from __future__ import annotations

import re
from typing import Iterable, List


def _compile(expr: str) -> "re.Pattern[str]":
    return re.compile(".*".join(re.escape(part) for part in expr.split("*")))


def matches_index_pattern(pattern: str, name: str) -> bool:
    """True when ``name`` is selected by ``pattern``."""
    selected = False
    first = True
    for raw in pattern.split(","):
        expr = raw.strip()
        if not expr:
            continue
        if expr.startswith("-") and not first:
            if selected and _compile(expr[1:]).fullmatch(name):
                selected = False
        elif _compile(expr).fullmatch(name):
            selected = True
        first = False
    return selected


def resolve_index_pattern(pattern: str, names: Iterable[str]) -> List[str]:
    """Names from ``names`` selected by ``pattern``, in input order."""
    return [n for n in names if matches_index_pattern(pattern, n)]
