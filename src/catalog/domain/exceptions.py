"""Domain-level exceptions.

Malformed entities and infrastructure faults are expressed as subclasses
of DomainException so the CLI layer can catch them uniformly and display
user-friendly messages.  Expected outcomes of applying a discount are
*not* exceptions; see ``catalog.domain.model.discount_result``.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class DuplicateEntityError(DomainException):
    """An entity with the same identity already exists."""


class StoreFailure(DomainException):
    """The persistent store could not complete an operation."""
