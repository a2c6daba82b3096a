"""Domain-level exceptions.

Business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
Storage failures are a separate family: the aggregate never raises them.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class InvalidArgument(DomainException):
    """A business rule or invariant was violated by a mutation's input."""


class CurrencyMismatch(DomainException):
    """Two Money values with different currencies were combined."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class PersistenceError(Exception):
    """The storage layer could not commit or read the requested changes."""
