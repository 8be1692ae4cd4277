"""Crime grade rules - address normalization and the simulated grade classifier"""

import re
from typing import Callable, Tuple

VALID_GRADES = ("A", "B", "C", "D", "E", "F")
FALLBACK_GRADE = "C"

# Unknown addresses never land on the extremes
HASHED_GRADES = ("B", "C", "D", "E")

HIGH_RISK_KEYWORDS = ("east palo alto", "oakland downtown", "tenderloin", "industrial", "warehouse")
LOW_RISK_KEYWORDS = ("sunnyvale", "cupertino", "hills", "park", "garden")
MEDIUM_RISK_KEYWORDS = ("san jose", "fremont", "mountain view")
URBAN_KEYWORDS = ("downtown", "central", "san francisco")

_WHITESPACE_RUN = re.compile(r"\s+")


def normalize_address(address: str) -> str:
    """
    Reduce an address to a stable cache key.

    Lowercase, drop anything that is not a letter, digit or whitespace,
    collapse whitespace runs to a single space and trim. Idempotent.

    Example:
        "  789   PINE St., Denver " -> "789 pine st denver"
    """
    lowered = address.lower()
    kept = "".join(ch for ch in lowered if ch.isalnum() or ch.isspace())
    return _WHITESPACE_RUN.sub(" ", kept).strip()


def validate_grade(grade: str) -> str:
    """Upper-case an upstream grade; anything outside A-F becomes FALLBACK_GRADE"""
    upper_grade = grade.upper()
    if upper_grade in VALID_GRADES:
        return upper_grade
    return FALLBACK_GRADE


def address_hash(normalized_address: str) -> int:
    """
    Order-sensitive 32-bit string hash (h * 31 + unit), made non-negative.

    Iterates UTF-16 code units, so characters outside the Basic
    Multilingual Plane contribute their surrogate pair.
    """
    encoded = normalized_address.encode("utf-16-le", "surrogatepass")
    h = 0
    for i in range(0, len(encoded), 2):
        h = h * 31 + int.from_bytes(encoded[i:i + 2], "little")
        # Wrap to a signed 32-bit integer on every step
        h = (h + 2**31) % 2**32 - 2**31
    return abs(h)


def _contains_any(*keywords: str) -> Callable[[str], bool]:
    return lambda address: any(keyword in address for keyword in keywords)


def _is_palo_alto(address: str) -> bool:
    # "east palo alto" textually contains "palo alto" but is high risk
    return "palo alto" in address and "east palo alto" not in address


def _is_low_risk(address: str) -> bool:
    return _is_palo_alto(address) or _contains_any(*LOW_RISK_KEYWORDS)(address)


# Evaluated top to bottom, first match wins. Disqualifying keywords come first.
GRADE_RULES: Tuple[Tuple[Callable[[str], bool], str], ...] = (
    (_contains_any(*HIGH_RISK_KEYWORDS), "F"),
    (_is_low_risk, "A"),
    (_contains_any(*MEDIUM_RISK_KEYWORDS), "B"),
    (_contains_any(*URBAN_KEYWORDS), "D"),
)


def simulate_crime_grade(normalized_address: str) -> str:
    """
    Classify a normalized address without any external data.

    Rules (first match wins):
    - F: east palo alto, oakland downtown, tenderloin, industrial, warehouse
    - A: sunnyvale, palo alto (not east palo alto), cupertino, hills, park, garden
    - B: san jose, fremont, mountain view
    - D: downtown, central, san francisco
    - otherwise a stable hash of the address picks one of B, C, D, E
    """
    for matches, grade in GRADE_RULES:
        if matches(normalized_address):
            return grade

    return HASHED_GRADES[address_hash(normalized_address) % len(HASHED_GRADES)]
