# ui/viewer.py
from enum import Enum
from typing import Iterable, Iterator, List, Optional, Tuple

from sdk.errors import CatalogError
from sdk.models import Product, Rating


class ViewState(str, Enum):
    LOADING = "loading"
    ERROR = "error"
    READY = "ready"


class ProductStore:
    """
    The viewer's product list. It is a local cache of the remote collection:
    nothing invalidates it, and new records are only ever added at the front.
    """

    def __init__(self, products: Optional[Iterable[Product]] = None):
        self._items: List[Product] = list(products or [])

    def prepend(self, product: Product) -> None:
        self._items.insert(0, product)

    def replace_all(self, products: Iterable[Product]) -> None:
        self._items = list(products)

    @property
    def items(self) -> Tuple[Product, ...]:
        return tuple(self._items)

    def __iter__(self) -> Iterator[Product]:
        return iter(tuple(self._items))

    def __len__(self) -> int:
        return len(self._items)


class CatalogViewer:
    """Loads the product collection once and holds it for rendering."""

    def __init__(self, client, store: Optional[ProductStore] = None):
        self.client = client
        self.store = store if store is not None else ProductStore()
        self.state = ViewState.LOADING
        self.error: Optional[str] = None
        self._loaded = False

    @property
    def products(self) -> Tuple[Product, ...]:
        return self.store.items

    def load(self) -> ViewState:
        # One fetch per viewer: no retry, no refresh.
        if self._loaded:
            return self.state
        self._loaded = True
        try:
            products = self.client.list_products()
        except CatalogError as e:
            self.error = str(e) or "Failed to load products"
            self.state = ViewState.ERROR
            return self.state
        self.store.replace_all(products)
        self.state = ViewState.READY
        return self.state

    def add_created(self, product: Product) -> None:
        if product.rating is None:
            product = product.model_copy(update={"rating": Rating(rate=0, count=0)})
        self.store.prepend(product)
