"""Errors raised by the catalog and handed to the central error page.

Field validation failures are not errors here: the form workflow reports them
as a rejected result and the view re-renders the form.
"""


class CatalogError(Exception):
    """Base error carrying the HTTP status the error page should use."""

    status = 500

    def __init__(self, message, status=None):
        super().__init__(message)
        self.message = message
        if status is not None:
            self.status = status


class NotFoundError(CatalogError):
    status = 404


class StoreError(CatalogError):
    """The store could not complete a read or write. Never retried."""

    status = 500
