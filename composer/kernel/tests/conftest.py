"""
Composer kernel test configuration.

Kernel tests are pure or use MemoryStorage. PostgresStorage tests that need
DATABASE_URL are skipped automatically when it is not set.
"""

import pytest

from composer.kernel.types import Product


@pytest.fixture
def catalog():
    """A small store catalog, out of id order on purpose."""
    return [
        Product(id="p3", name="Canvas Tote", price=24.0, images=["https://cdn.example.com/tote.jpg"], slug="canvas-tote"),
        Product(
            id="p1",
            name="Linen Shirt",
            price=59.5,
            compare_price=79.0,
            images=["https://cdn.example.com/shirt.jpg"],
            slug="linen-shirt",
            description="Breathable linen for warm days.",
        ),
        Product(id="p2", name="Wool Socks", price=12.0, images=[], slug="wool-socks"),
    ]
