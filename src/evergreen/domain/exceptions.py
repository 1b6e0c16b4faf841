"""Domain-level exceptions.

Every failure the storefront can hit is a subclass of DomainException so
the CLI layer can catch them uniformly and display a readable message
instead of a traceback.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class ConfigurationError(DomainException):
    """An environment setting could not be interpreted."""


class CatalogLoadError(DomainException):
    """The catalog could not be fetched or its response could not be parsed."""


class SeedError(DomainException):
    """The backend refused or failed to seed demo catalog data."""


class CheckoutError(DomainException):
    """The order could not be submitted; the cart is left as it was."""


class CheckoutInProgressError(CheckoutError):
    """A checkout was attempted while another one is still in flight."""
