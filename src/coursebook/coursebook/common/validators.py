from __future__ import annotations

import math
from typing import Any, Iterable, Mapping


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def missing_fields(data: Mapping[str, Any], fields: Iterable[str]) -> list[str]:
    return [f for f in fields if is_blank(data.get(f))]


def is_number(value: Any) -> bool:
    # bool is an int subclass but never a score
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return not math.isnan(value)


def normalize_username(value: Any) -> str:
    return str(value).strip().lower()
