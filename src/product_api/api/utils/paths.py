import re

from src.product_api.core.exceptions import IdParseError

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_INT64_DIGITS = 19
_DECIMAL = re.compile(r"[+-]?[0-9]+")


def get_service_name(path: str) -> str:
    """Return the first path segment, e.g. ``getProduct`` for ``/getProduct/7``."""
    parts = path.split("/")
    if len(parts) < 2 or not parts[1]:
        return "Unknown"
    return parts[1]


def get_id(path: str) -> int:
    """Parse the segment after the route prefix as a signed 64-bit integer."""
    parts = path.split("/")
    if len(parts) < 3 or not parts[2]:
        raise IdParseError("the id argument is not present")

    raw = parts[2]
    if not _DECIMAL.fullmatch(raw):
        raise IdParseError(f"numeric id is expected. Given: {raw}")

    sign = "-" if raw.startswith("-") else ""
    digits = raw.lstrip("+-").lstrip("0") or "0"
    # Leading zeros aside, an int64 has at most 19 digits
    if len(digits) > _INT64_DIGITS:
        raise IdParseError(f"numeric id is expected. Given: {raw}")

    value = int(sign + digits)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise IdParseError(f"numeric id is expected. Given: {raw}")
    return value
