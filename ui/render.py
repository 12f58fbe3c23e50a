# ui/render.py
from typing import Iterable, List
from urllib.parse import urlparse

from rich import box
from rich.columns import Columns
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from sdk.models import Product
from .viewer import CatalogViewer, ViewState


def describe_image(image) -> str:
    if not image:
        return "-"
    if image.startswith("data:"):
        header, _, data = image.partition(",")
        mime = header[len("data:"):].split(";")[0] or "unknown"
        return f"{mime} ({len(data) * 3 // 4} bytes)"
    parsed = urlparse(image)
    return f"{parsed.netloc}{parsed.path}" if parsed.netloc else image


def _rating(p: Product) -> str:
    return f"{p.rating.rate:.1f}" if p.rating else "-"


def _stock(p: Product) -> str:
    return str(p.stock) if p.stock is not None else "-"


def product_table(products: Iterable[Product]) -> Table:
    table = Table(
        title="📦 Product Table",
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", style="dim", width=6, justify="center")
    table.add_column("Title", style="bold", max_width=30, no_wrap=True)
    table.add_column("Category", width=16)
    table.add_column("Price", justify="right", width=10)
    table.add_column("Rating", justify="center", width=8)
    table.add_column("Stock", justify="center", width=7)
    table.add_column("Image", max_width=32, no_wrap=True)

    for p in products:
        table.add_row(
            str(p.id),
            escape(p.title),
            escape(p.category.capitalize()),
            f"${p.price:.2f}",
            _rating(p),
            _stock(p),
            describe_image(p.image),
        )
    return table


def product_card(p: Product) -> Panel:
    votes = f" ({p.rating.count})" if p.rating else ""
    body = (
        f"[dim]{escape(p.category.upper())}[/dim]\n"
        f"[bold]{escape(p.title)}[/bold]\n\n"
        f"[green]${p.price:.2f}[/green]   {_rating(p)} / 5{votes}\n"
        f"Stock: {_stock(p)}\n"
        f"[dim]{describe_image(p.image)}[/dim]"
    )
    return Panel(body, title=f"#{p.id}", width=36, border_style="blue")


def product_cards(products: Iterable[Product]) -> List[Panel]:
    return [product_card(p) for p in products]


def render_viewer(console: Console, viewer: CatalogViewer) -> None:
    if viewer.state is ViewState.LOADING:
        console.print("[dim]Loading products…[/dim]")
        return
    if viewer.state is ViewState.ERROR:
        console.print(Panel(f"[red]{escape(viewer.error or '')}[/red]", title="Could not load products.", border_style="red"))
        return
    if not viewer.products:
        console.print("[italic yellow]No products found[/italic yellow]")
        return
    console.print(product_table(viewer.products))
    console.print("[bold]Product Cards[/bold]")
    console.print(Columns(product_cards(viewer.products)))
