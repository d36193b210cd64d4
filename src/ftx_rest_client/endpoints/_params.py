"""Query-string helpers shared by endpoint modules."""

from __future__ import annotations

from ..primitives import UnixTimestamp


def time_range_params(
    start_time: UnixTimestamp | None,
    end_time: UnixTimestamp | None,
) -> list[tuple[str, str]]:
    params: list[tuple[str, str]] = []
    if start_time is not None:
        params.append(("start_time", str(start_time)))
    if end_time is not None:
        params.append(("end_time", str(end_time)))
    return params


def bool_param(value: bool) -> str:
    return "true" if value else "false"


__all__ = [
    "time_range_params",
    "bool_param",
]
