"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidFinancialDataError(DomainException):
    """Financial record fails the preconditions required for analysis"""

    pass


class UnknownFieldError(DomainException):
    """Form field key has no entry in the field map"""

    pass
