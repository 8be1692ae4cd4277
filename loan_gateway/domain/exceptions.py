"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class CrimeGradeAPIError(DomainException):
    """Crime grade API returned an error, bad payload, or is unavailable"""

    pass


class InvalidApplicationError(DomainException):
    """Application values outside the range the evaluator can decide on"""

    pass
