# sdk/errors.py

class CatalogError(Exception):
    """Base class for everything the catalog clients raise."""

class CatalogTransportError(CatalogError):
    """The request never produced a response (DNS, refused connection, timeout...)."""

class CatalogHTTPError(CatalogError):
    """The server answered with a non-2xx status."""

    def __init__(self, status_code: int, body: str = ""):
        self.status_code = status_code
        self.body = body
        super().__init__(f"HTTP {status_code}: {body}" if body else f"HTTP {status_code}")

class CatalogResponseError(CatalogError):
    """A 2xx answer whose body is not JSON or does not describe products."""
