"""Unit tests for address normalization and simulated crime grading"""

import pytest
from loan_gateway.domain.crime_grades import (
    HASHED_GRADES,
    address_hash,
    normalize_address,
    simulate_crime_grade,
    validate_grade,
)


def test_normalize_address_equivalent_forms():
    """Test case, punctuation and whitespace variants share one key"""
    expected = "789 pine st denver co 80202"

    assert normalize_address("789 Pine St, Denver, CO 80202") == expected
    assert normalize_address("  789   PINE   ST,   DENVER,   CO   80202  ") == expected
    assert normalize_address("789 Pine St., Denver, CO 80202") == expected
    assert normalize_address("789\tPine St.\nDenver, CO 80202") == expected


def test_normalize_address_idempotent():
    for address in ["12 Main St. , Apt #4", "  East   Palo Alto, CA ", "42 Arbitrary Lane"]:
        once = normalize_address(address)
        assert normalize_address(once) == once


def test_normalize_address_punctuation_only_gap():
    """Test punctuation between spaces does not leave a double space"""
    assert normalize_address("Main St - Unit 5") == "main st unit 5"


@pytest.mark.parametrize("raw, expected", [("a", "A"), ("f", "F"), ("C", "C"), ("X", "C"), ("", "C"), ("AB", "C")])
def test_validate_grade(raw, expected):
    assert validate_grade(raw) == expected


def test_address_hash_known_values():
    """Test the hash matches the classic h * 31 + ch 32-bit string hash"""
    assert address_hash("") == 0
    assert address_hash("a") == 97
    assert address_hash("ab") == 97 * 31 + 98
    assert address_hash("hello") == 99162322
    # Wraps to -2**31 before abs()
    assert address_hash("polygenelubricants") == 2**31


def test_address_hash_uses_utf16_code_units():
    """Test characters outside the BMP hash as their surrogate pair"""
    assert address_hash("é") == 233
    # U+1D400 encodes as D835 DC00
    assert address_hash("\U0001d400") == 0xD835 * 31 + 0xDC00
    assert address_hash(normalize_address("\U0001d400 Main St")) == address_hash("𝐀 main st")


def test_address_hash_order_sensitive():
    assert address_hash("ab") != address_hash("ba")


@pytest.mark.parametrize(
    "address",
    [
        "east palo alto ca",
        "12 oakland downtown",
        "tenderloin district",
        "789 industrial boulevard",
        "5 warehouse row",
    ],
)
def test_high_risk_keywords_grade_f(address):
    assert simulate_crime_grade(address) == "F"


def test_east_palo_alto_is_not_palo_alto():
    """Test the unsafe superstring wins over the safe city name it contains"""
    assert simulate_crime_grade("100 university ave east palo alto ca") == "F"
    assert simulate_crime_grade("100 university ave palo alto ca") == "A"


@pytest.mark.parametrize(
    "address",
    [
        "558 carlisle way sunnyvale ca 94087",
        "1 infinite loop cupertino",
        "456 beverly hills drive",
        "321 park avenue",
        "9 rose garden court",
    ],
)
def test_low_risk_keywords_grade_a(address):
    assert simulate_crime_grade(address) == "A"


@pytest.mark.parametrize("address", ["1 first st san jose", "2 mission blvd fremont", "3 castro st mountain view"])
def test_medium_risk_keywords_grade_b(address):
    assert simulate_crime_grade(address) == "B"


@pytest.mark.parametrize("address", ["123 downtown street", "4 central ave", "777 market street san francisco"])
def test_urban_keywords_grade_d(address):
    assert simulate_crime_grade(address) == "D"


def test_high_risk_checked_before_urban():
    """Test "oakland downtown" is F even though "downtown" alone is D"""
    assert simulate_crime_grade("oakland downtown") == "F"


def test_unknown_address_uses_hash():
    """Test unmatched addresses get a stable mid-range grade"""
    address = normalize_address("42 Arbitrary Lane")

    grade = simulate_crime_grade(address)

    assert grade in HASHED_GRADES
    assert grade == HASHED_GRADES[address_hash(address) % 4]
    assert all(simulate_crime_grade(address) == grade for _ in range(5))
