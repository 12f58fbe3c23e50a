# sdk/client.py
import requests
import httpx
from typing import Any, Dict, List, Optional, Union
from decouple import config
from pydantic import ValidationError

from .errors import CatalogHTTPError, CatalogResponseError, CatalogTransportError
from .models import Product, ProductPayload

CATALOG_API_URL = config("CATALOG_API_URL", default="https://fakestoreapi.com")
STORE_API_URL = config("STORE_API_URL", default="http://127.0.0.1:4000")
HTTP_TIMEOUT = config("HTTP_TIMEOUT", default=10, cast=int)

PayloadLike = Union[ProductPayload, Dict[str, Any]]


def _is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


class CatalogClient:
    """
    Client for the public catalog (FakeStore-style `title` records).

    Every call is a single request: no retries, and a non-2xx answer raises
    CatalogHTTPError carrying the status and the raw body.
    """

    def __init__(self, base_url: str = CATALOG_API_URL, timeout: int = HTTP_TIMEOUT,
                 session: Optional[Any] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()
        self.transport = transport

    # -----------------------
    # Record shape
    # -----------------------
    def _to_product(self, record: Dict[str, Any]) -> Product:
        return Product.model_validate(record)

    def _to_body(self, payload: PayloadLike) -> Dict[str, Any]:
        if isinstance(payload, ProductPayload):
            return payload.model_dump()
        return dict(payload)

    # -----------------------
    # Transport
    # -----------------------
    def _decode(self, r) -> Any:
        if not _is_success(r.status_code):
            raise CatalogHTTPError(r.status_code, r.text)
        try:
            return r.json()
        except ValueError as e:
            raise CatalogResponseError(f"Invalid JSON in response (HTTP {r.status_code})") from e

    def _request(self, method: str, path: str, **kwargs) -> Any:
        try:
            r = self.session.request(method, f"{self.base_url}{path}", timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise CatalogTransportError(str(e)) from e
        return self._decode(r)

    def _product(self, record: Any) -> Product:
        if not isinstance(record, dict):
            raise CatalogResponseError(f"Unexpected product record: {record!r}")
        try:
            return self._to_product(record)
        except ValidationError as e:
            raise CatalogResponseError(f"Malformed product record: {e.error_count()} invalid field(s)") from e

    def _products(self, records: Any) -> List[Product]:
        if not isinstance(records, list):
            raise CatalogResponseError("Expected a list of products")
        return [self._product(p) for p in records]

    # -----------------------
    # Products
    # -----------------------
    def list_products(self) -> List[Product]:
        return self._products(self._request("GET", "/products"))

    def create_product(self, payload: PayloadLike) -> Product:
        return self._product(self._request("POST", "/products", json=self._to_body(payload)))

    async def list_products_async(self) -> List[Product]:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                r = await client.get(f"{self.base_url}/products")
        except httpx.HTTPError as e:
            raise CatalogTransportError(str(e)) from e
        return self._products(self._decode(r))


class StoreClient(CatalogClient):
    """
    Client for the Store Product API (catalog.main).

    Rows carry `name` where the catalog uses `title`; both directions are
    mapped so callers only ever see `Product`.
    """

    def __init__(self, base_url: str = STORE_API_URL, **kwargs):
        super().__init__(base_url=base_url, **kwargs)

    def _to_product(self, record: Dict[str, Any]) -> Product:
        row = dict(record)
        row["title"] = row.pop("name", "")
        return Product.model_validate(row)

    def _to_body(self, payload: PayloadLike) -> Dict[str, Any]:
        body = super()._to_body(payload)
        body["name"] = body.pop("title", None)
        return body

    def get_product(self, product_id: int) -> Product:
        return self._product(self._request("GET", f"/products/{product_id}"))

    def update_product(self, product_id: int, payload: PayloadLike) -> Product:
        return self._product(self._request("PUT", f"/products/{product_id}", json=self._to_body(payload)))

    def delete_product(self, product_id: int) -> str:
        body = self._request("DELETE", f"/products/{product_id}")
        if not isinstance(body, dict):
            raise CatalogResponseError("Expected a confirmation message")
        return body.get("message", "")
