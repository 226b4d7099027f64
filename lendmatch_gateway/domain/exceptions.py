"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class MarketDataAPIError(DomainException):
    """Financial data source returned an error or is unavailable"""

    pass


class InvalidProfileError(DomainException):
    """Borrower or lender record cannot be evaluated"""

    pass


# Failures a single malformed record can raise; stages log and skip these
RECORD_ERRORS = (ArithmeticError, KeyError, TypeError, ValueError, InvalidProfileError)
