"""Exception types for the cache and the product domain."""

from __future__ import annotations


class CacheError(Exception):
    """Base class for errors raised by the cache itself."""


class InvalidConfigurationError(CacheError, ValueError):
    """Non-positive TTL, empty key, or no loader to call."""


class ReentrantLoadError(CacheError, RuntimeError):
    """A loader for a key asked the cache for that same key."""

    def __init__(self, key: str) -> None:
        super().__init__(f"re-entrant load for key {key!r}")
        self.key = key


class ProductNotFoundError(LookupError):
    def __init__(self, product_id: int) -> None:
        super().__init__(f"product {product_id} not found")
        self.product_id = product_id


class InsufficientStockError(ValueError):
    def __init__(self, product_id: int, stock: int, quantity: int) -> None:
        super().__init__(
            f"product {product_id} has {stock} in stock, cannot remove {quantity}"
        )
        self.product_id = product_id
        self.stock = stock
        self.quantity = quantity


class ReadOnlyCatalogError(RuntimeError):
    """Writes attempted while products come from a remote catalog."""

    def __init__(self, base_url: str) -> None:
        super().__init__(f"catalog at {base_url} is read-only from this service")
        self.base_url = base_url
