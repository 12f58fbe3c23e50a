# cli.py
import argparse
import sys
from datetime import datetime
from typing import Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import IntPrompt, Confirm, Prompt
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from sdk.client import CatalogClient, StoreClient
from sdk.errors import CatalogError
from sdk.models import ProductPayload
from ui.form import ProductForm
from ui.render import product_table, describe_image, render_viewer
from ui.viewer import CatalogViewer

console = Console()

status_message = "Ready"

# Custom prompt style for prompt_toolkit
custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


# ---------------------------
# API wrapper: spinner + status line
# ---------------------------
def try_api(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """
    Calls fn(*args, **kwargs) behind a spinner.
    Catalog errors are reported in the status panel and None is returned.
    """
    global status_message
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
        ) as progress:
            progress.add_task(description="Processing...", total=None)
            result = fn(*args, **kwargs)

        if success_msg:
            status_message = success_msg
            console.print(show_status(success_msg, True))
        return result
    except CatalogError as e:
        status_message = f"Error: {e}"
        console.print(show_status(f"Error: {e}", False))
        return None


def create_header(backend: str, base_url: str):
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)

    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row(
        "🛍️ Product Catalog",
        f"[bold blue]{backend}[/bold blue] [dim]{base_url}[/dim]",
        f"[dim]{now}[/dim]"
    )
    return Panel(header, style="bold blue")


# ---------------------------
# Input helpers
# ---------------------------
def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def ask_float(message: str, default: float = 10.0) -> float:
    while True:
        raw = Prompt.ask(message, default=str(default))
        try:
            return float(raw)
        except ValueError:
            console.print("[red]Please enter a valid number.[/red]")


def product_id_completer(viewer: CatalogViewer):
    return WordCompleter([str(p.id) for p in viewer.products], ignore_case=True)


# ---------------------------
# Add product (form)
# ---------------------------
def fill_form(form: ProductForm):
    form.title = prompt_with_autocomplete("Title")
    form.price = prompt_with_autocomplete("💰 Price", default=form.price)
    form.category = prompt_with_autocomplete("🏷️ Category")
    form.description = prompt_with_autocomplete("Description")
    while True:
        path = prompt_with_autocomplete("🖼️ Image file path").strip()
        if not path:
            break
        if form.attach_image(path):
            console.print(f"[dim]Preview: {describe_image(form.preview)}[/dim]")
            break
        console.print(f"[red]{form.error}[/red]")


def add_product(client, viewer: CatalogViewer):
    form = ProductForm()
    fill_form(form)
    if not form.can_submit:
        console.print(show_status("Title, category, description, a price above 0 and an image are required.", False))
        return

    created = form.submit(client, on_success=viewer.add_created)
    if created is None:
        console.print(show_status(form.error or "Failed to submit product.", False))
        return
    console.print(show_status(form.success))
    console.print(product_table([viewer.products[0]]))


def update_product(client: StoreClient):
    pid = IntPrompt.ask("Product ID")
    current = try_api(client.get_product, pid)
    if current is None:
        return
    payload = ProductPayload(
        title=prompt_with_autocomplete("Title", default=current.title),
        price=ask_float("💰 Price", default=current.price),
        category=prompt_with_autocomplete("🏷️ Category", default=current.category),
        description=prompt_with_autocomplete("Description", default=current.description),
        image=current.image or "",
    )
    resp = try_api(client.update_product, pid, payload, success_msg=f"Product {pid} updated")
    if resp:
        console.print(product_table([resp]))


# ---------------------------
# Main menu
# ---------------------------
def menu(client, backend: str):
    global status_message

    console.clear()
    console.print(create_header(backend, client.base_url))

    # The collection is fetched once; later listings show the held list.
    viewer = CatalogViewer(client)
    try_api(viewer.load)
    crud = isinstance(client, StoreClient)

    while True:
        if status_message:
            console.print(show_status(status_message, "Error" not in status_message))

        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)

        options = [
            ("1", "📦 List products", "3", "ℹ️ Get product by ID" if crud else ""),
            ("2", "➕ Add product", "4", "✏️ Update product" if crud else ""),
            ("", "", "5", "🗑️ Delete product" if crud else ""),
            ("", "", "q", "👋 Quit"),
        ]
        for row in options:
            menu_table.add_row(*row)

        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter(["1", "2", "3", "4", "5", "q", "quit", "exit"])
        ).strip()

        if choice == "1":
            render_viewer(console, viewer)

        elif choice == "2":
            add_product(client, viewer)

        elif choice == "3" and crud:
            pid = prompt_with_autocomplete("Enter product ID", completer=product_id_completer(viewer))
            if pid.isdigit():
                resp = try_api(client.get_product, int(pid), success_msg=f"Product {pid} details loaded")
                if resp:
                    console.print(product_table([resp]))

        elif choice == "4" and crud:
            update_product(client)

        elif choice == "5" and crud:
            pid = IntPrompt.ask("Product ID")
            if Confirm.ask(f"[red]Delete product {pid}?[/red]"):
                try_api(client.delete_product, pid, success_msg=f"Product {pid} deleted")

        elif choice.lower() in ("q", "quit", "exit"):
            if Confirm.ask("Are you sure you want to quit?"):
                console.print(Panel.fit("[bold green]Goodbye! 👋[/bold green]", title="Goodbye"))
                sys.exit(0)

        console.print()
        console.rule(style="dim")


def build_client(backend: str, base_url: Optional[str]):
    if backend == "store":
        return StoreClient(base_url=base_url) if base_url else StoreClient()
    return CatalogClient(base_url=base_url) if base_url else CatalogClient()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Product catalog terminal")
    parser.add_argument("--backend", choices=["remote", "store"], default="remote",
                        help="remote: public catalog API; store: the Store Product API")
    parser.add_argument("--base-url", help="Override the backend URL")
    args = parser.parse_args()

    try:
        menu(build_client(args.backend, args.base_url), args.backend)
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)
