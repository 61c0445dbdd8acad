"""Parsing of the raw ``query`` parameter."""
from __future__ import annotations

import re
from typing import Optional

from domain.common.exceptions import InvalidArgument
from .entity import INT64_MAX, INT64_MIN, PrimeRequest


DEFAULT_QUERY = "4"

# Optional sign, ASCII digits only: no whitespace, no "_" separators
_DECIMAL_RE = re.compile(r"([+-]?)([0-9]+)")

# len(str(2 ** 63)); longer digit runs cannot fit in int64
_MAX_INT64_DIGITS = 19


def parse_query(raw: Optional[str]) -> PrimeRequest:
    """Parse ``raw`` as a base-10 int64 and wrap it in a request.

    ``None`` means the parameter was absent and falls back to ``"4"``.
    Raises ``InvalidArgument`` with the parse error text otherwise.
    """
    if raw is None:
        raw = DEFAULT_QUERY
    match = _DECIMAL_RE.fullmatch(raw)
    if match is None:
        raise InvalidArgument(f'parsing "{raw}": invalid syntax', value=raw)
    sign, digits = match.groups()
    # Leading zeros are legal; strip them before sizing so int() never sees huge input
    digits = digits.lstrip("0") or "0"
    if len(digits) > _MAX_INT64_DIGITS:
        raise InvalidArgument(f'parsing "{raw}": value out of range', value=raw)
    value = int(sign + digits, 10)
    if not INT64_MIN <= value <= INT64_MAX:
        raise InvalidArgument(f'parsing "{raw}": value out of range', value=raw)
    return PrimeRequest(query=value)
