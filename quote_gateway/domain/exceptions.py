"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidQuoteRequestError(DomainException):
    """Quote request is malformed or violates an underwriting rule"""

    pass


class QuoteNotFoundError(DomainException):
    """No quote is stored under the requested identifier"""

    pass


class InvalidArgumentError(DomainException, ValueError):
    """Caller passed a null request or a blank identifier"""

    pass


class PersistenceError(DomainException):
    """Quote store rejected a read or write"""

    pass
