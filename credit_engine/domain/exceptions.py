"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidCSVError(DomainException):
    """CSV export is missing a header row or data rows"""

    pass


class UnknownLetterTypeError(DomainException):
    """Requested dispute letter type has no registered template"""

    pass
