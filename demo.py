#!/usr/bin/env python
from rich import print

from sdk.client import StoreClient
from sdk.errors import CatalogHTTPError
from sdk.models import ProductPayload

# 1x1 transparent PNG
PIXEL = "data:image/png;base64,iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mNkYAAAAAYAAjCB0C8AAAAASUVORK5CYII="


def main():
    c = StoreClient(base_url="http://127.0.0.1:4000")

    # -----------------------------
    # Create products
    # -----------------------------
    print("\nCreating products...")
    shirt = c.create_product(ProductPayload(
        title="Classic Cotton T-Shirt", price=19.99, description="Soft everyday tee",
        image=PIXEL, category="men's clothing",
    ))
    mug = c.create_product(ProductPayload(
        title="Enamel Mug", price=8.5, description="Camp mug, 350ml",
        image="https://example.com/mug.png", category="kitchen",
    ))
    print(shirt)
    print(mug)

    # -----------------------------
    # List products (newest first)
    # -----------------------------
    print("\nListing products...")
    print(c.list_products())

    # -----------------------------
    # Replace a product
    # -----------------------------
    print(f"\nUpdating product {mug.id}...")
    print(c.update_product(mug.id, ProductPayload(
        title="Enamel Mug", price=9.0, description="Camp mug, 350ml",
        image=mug.image, category="kitchen",
    )))

    # -----------------------------
    # Delete, then show the 404
    # -----------------------------
    print(f"\nDeleting product {shirt.id}...")
    print(c.delete_product(shirt.id))
    try:
        c.get_product(shirt.id)
    except CatalogHTTPError as e:
        print(f"[yellow]{e}[/yellow]")

if __name__ == "__main__":
    main()
