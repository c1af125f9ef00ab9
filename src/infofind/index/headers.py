"""Which info fields act as headers when a result list is sorted.

Templates that nest headers (one per sort level) ask these helpers which
field heads a given level.
"""

from __future__ import annotations

from typing import List, Optional

from infofind.config import AppConfig
from infofind.utils.params import RequestParams, param_values


def active_sort_fields(params: RequestParams, config: AppConfig) -> List[str]:
    """Sort fields from the request if a sort was asked for, else the default order."""
    requested = param_values(params, config.sort_param)
    if any(requested):
        return requested
    return list(config.sort_order)


def header_field_at(level: int, params: RequestParams, config: AppConfig) -> Optional[str]:
    fields = active_sort_fields(params, config)
    if 0 <= level < len(fields) and fields[level]:
        return fields[level]
    return None


def is_field_within_header_level(
    field: str, level: int, params: RequestParams, config: AppConfig
) -> bool:
    """True if *field* heads any level from 0 up to and including *level*."""
    if not field or level < 0:
        return False
    return field in active_sort_fields(params, config)[: level + 1]
