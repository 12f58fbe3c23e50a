# ui/form.py
import base64
import math
import mimetypes
from typing import Callable, Optional

from sdk.errors import CatalogError
from sdk.models import Product, ProductPayload

INVALID_IMAGE = "Please choose a valid image file."
UNREADABLE_IMAGE = "Failed to read image file."
CREATED = "Product created successfully!"


def encode_image(data: bytes, mime: str) -> str:
    """Return `data` as a data URI, the same text a browser FileReader would produce."""
    return f"data:{mime};base64,{base64.b64encode(data).decode('ascii')}"


def parse_price(raw: str) -> Optional[float]:
    try:
        value = float(str(raw).strip())
    except ValueError:
        return None
    return value if math.isfinite(value) else None


class ProductForm:
    """
    Input state for creating one product.

    Fields hold what the user typed; `image` holds the encoded data URI and
    doubles as the preview. A form instance submits at most one request at a
    time: `can_submit` is false while `submitting` is set.
    """

    def __init__(self):
        self.submitting = False
        self.error: Optional[str] = None
        self.success: Optional[str] = None
        self.reset()

    def reset(self) -> None:
        self.title = ""
        self.price = ""
        self.description = ""
        self.category = ""
        self.image = ""
        self.preview = ""

    @property
    def is_valid(self) -> bool:
        price = parse_price(self.price)
        return (
            len(self.title.strip()) > 0
            and price is not None and price > 0
            and len(self.description.strip()) > 0
            and len(self.category.strip()) > 0
            and len(self.image.strip()) > 0
            and not self.submitting
        )

    can_submit = is_valid

    def attach_image(self, path: str) -> bool:
        mime, _ = mimetypes.guess_type(path)
        if not mime or not mime.startswith("image/"):
            self.error = INVALID_IMAGE
            return False
        try:
            with open(path, "rb") as f:
                data = f.read()
        except OSError:
            self.error = UNREADABLE_IMAGE
            return False
        self.error = None
        self.image = encode_image(data, mime)
        self.preview = self.image
        return True

    def payload(self) -> ProductPayload:
        return ProductPayload(
            title=self.title.strip(),
            price=parse_price(self.price) or 0.0,
            description=self.description.strip(),
            image=self.image,
            category=self.category.strip(),
        )

    def submit(self, client, on_success: Optional[Callable[[Product], None]] = None) -> Optional[Product]:
        if not self.can_submit:
            return None

        self.submitting = True
        self.error = None
        self.success = None
        try:
            created = client.create_product(self.payload())
        except CatalogError as e:
            self.error = str(e) or "Failed to submit product."
            return None
        finally:
            self.submitting = False

        self.success = CREATED
        if on_success is not None:
            on_success(created)
        self.reset()
        return created
