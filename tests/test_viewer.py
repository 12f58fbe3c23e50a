# tests/test_viewer.py
from rich.console import Console

from sdk.client import CatalogClient
from sdk.errors import CatalogHTTPError
from sdk.models import Product, Rating
from ui.render import product_table, product_cards, render_viewer, describe_image
from ui.viewer import CatalogViewer, ProductStore, ViewState

from .fakes import REMOTE_PRODUCTS


class CountingClient:
    def __init__(self, products=None, error=None):
        self.products = products or []
        self.error = error
        self.calls = 0

    def list_products(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return list(self.products)


def remote_products():
    return [Product.model_validate(p) for p in REMOTE_PRODUCTS]


def new_product(**kw):
    fields = dict(id=99, title="Fresh", category="misc", price=5.0, description="new", image="data:image/png;base64,AAAA")
    fields.update(kw)
    return Product(**fields)


def test_viewer_starts_loading():
    assert CatalogViewer(CountingClient()).state is ViewState.LOADING

def test_load_renders_one_row_and_card_per_record(remote_session):
    viewer = CatalogViewer(CatalogClient(base_url="http://testserver", session=remote_session))
    assert viewer.load() is ViewState.READY
    assert [p.id for p in viewer.products] == [1, 2, 3]
    assert product_table(viewer.products).row_count == 3
    cards = product_cards(viewer.products)
    assert [c.title for c in cards] == ["#1", "#2", "#3"]

def test_failed_fetch_is_error_state(failing_session):
    viewer = CatalogViewer(CatalogClient(base_url="http://testserver", session=failing_session))
    assert viewer.load() is ViewState.ERROR
    assert "503" in viewer.error
    assert viewer.products == ()

def test_error_render_never_shows_table():
    viewer = CatalogViewer(CountingClient(error=CatalogHTTPError(500)))
    viewer.load()
    console = Console(record=True, width=120)
    render_viewer(console, viewer)
    text = console.export_text()
    assert "Could not load products." in text
    assert "Product Table" not in text

def test_load_fetches_once():
    client = CountingClient(products=remote_products())
    viewer = CatalogViewer(client)
    viewer.load()
    viewer.load()
    assert client.calls == 1

def test_created_product_goes_first_with_zero_rating():
    viewer = CatalogViewer(CountingClient(products=remote_products()))
    viewer.load()
    viewer.add_created(new_product())
    head = viewer.products[0]
    assert head.id == 99
    assert head.rating == Rating(rate=0, count=0)
    assert [p.id for p in viewer.products[1:]] == [1, 2, 3]

def test_created_product_keeps_supplied_rating():
    viewer = CatalogViewer(CountingClient())
    viewer.add_created(new_product(rating={"rate": 4.5, "count": 2}))
    assert viewer.products[0].rating.rate == 4.5

def test_injected_store_receives_mutations():
    store = ProductStore()
    viewer = CatalogViewer(CountingClient(products=remote_products()), store=store)
    viewer.load()
    viewer.add_created(new_product())
    assert len(store) == 4
    assert next(iter(store)).id == 99

def test_ready_render_lists_titles_in_order():
    viewer = CatalogViewer(CountingClient(products=remote_products()))
    viewer.load()
    console = Console(record=True, width=200)
    render_viewer(console, viewer)
    text = console.export_text()
    positions = [text.index(p["title"]) for p in REMOTE_PRODUCTS]
    assert positions == sorted(positions)

def test_describe_image():
    assert describe_image(None) == "-"
    assert describe_image("https://fakestoreapi.com/img/1.jpg") == "fakestoreapi.com/img/1.jpg"
    assert describe_image("data:image/png;base64,AAAA") == "image/png (3 bytes)"

def test_html_success_page_is_error_state(html_session):
    viewer = CatalogViewer(CatalogClient(base_url="http://testserver", session=html_session))
    assert viewer.load() is ViewState.ERROR
    assert "Invalid JSON" in viewer.error
    assert viewer.products == ()

def test_malformed_record_is_error_state(malformed_session):
    viewer = CatalogViewer(CatalogClient(base_url="http://testserver", session=malformed_session))
    assert viewer.load() is ViewState.ERROR
    assert "Malformed product record" in viewer.error
    assert viewer.load() is ViewState.ERROR
