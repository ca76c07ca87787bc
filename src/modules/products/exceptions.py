"""Product domain exceptions.

Raised by the Service Layer when a request cannot be served.
The gRPC layer (Servicers) catches these and translates them into
the matching status codes.
"""

from __future__ import annotations


class ProductError(Exception):
    """Base class for every product domain failure."""


class InvalidProductId(ProductError):
    """The identifier is not a 24-character hex ObjectId."""


class EmptyProductUpdate(ProductError):
    """An update request carried no field to change."""


class ProductNotFound(ProductError):
    """No product document matches the requested identifier."""


class ProductStorageError(ProductError):
    """A MongoDB operation or document decode failed.

    The message is the underlying error text, passed through verbatim.
    """
