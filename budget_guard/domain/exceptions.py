"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidInputError(DomainException):
    """Budget snapshot cannot be assessed (zero allocation, bad window, non-finite amounts)"""

    pass
