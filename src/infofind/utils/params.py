"""Multi-valued request parameters, as a CGI query string would give them."""

from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Sequence, Tuple
from urllib.parse import parse_qsl

RequestParams = Mapping[str, Sequence[str]]


def params_from_pairs(pairs: Iterable[Tuple[str, str]]) -> Dict[str, List[str]]:
    params: Dict[str, List[str]] = {}
    for name, value in pairs:
        params.setdefault(name, []).append(value)
    return params


def param_values(params: RequestParams, name: str | None) -> List[str]:
    if not name:
        return []
    return list(params.get(name) or [])


def param_value(params: RequestParams, name: str | None) -> str:
    """First value of *name*, or an empty string."""
    values = param_values(params, name)
    return values[0] if values else ""


def params_from_query(query: str) -> Dict[str, List[str]]:
    """Parse a raw query string whose pairs are separated by ``&`` or ``;``."""
    pairs: List[Tuple[str, str]] = []
    for part in query.split(";"):
        pairs.extend(parse_qsl(part, keep_blank_values=True))
    return params_from_pairs(pairs)
