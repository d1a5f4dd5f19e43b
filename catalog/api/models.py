"""Pydantic models for catalog products and lookup reports."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Product(BaseModel):
    id: int
    name: str
    price: int
    description: str = ""
    stock: int = 0


class ProductResponse(BaseModel):
    """Read-only view handed to callers and stored in the cache."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    price: int
    description: str = ""
    stock: int = 0

    @classmethod
    def from_product(cls, product: Product) -> ProductResponse:
        return cls(**product.model_dump())


class BurstReport(BaseModel):
    """Outcome of one burst of concurrent lookups."""

    mode: str  # cached | uncached
    product_id: int
    requests: int
    backing_calls: int
    errors: int = 0
    elapsed_ms: float

    @property
    def avg_ms(self) -> float:
        if self.requests == 0:
            return 0.0
        return self.elapsed_ms / self.requests
