"""Strongly-typed identities.

Each identity wraps a single UUID and compares by value. The types are
distinct: an OrderId never equals a CustomerId, even over the same UUID.
No format validation happens on construction.
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID, uuid4


@dataclass(frozen=True)
class OrderId:
    value: UUID

    @classmethod
    def generate(cls) -> OrderId:
        return cls(uuid4())

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class CustomerId:
    value: UUID

    @classmethod
    def generate(cls) -> CustomerId:
        return cls(uuid4())

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class ProductId:
    value: UUID

    @classmethod
    def generate(cls) -> ProductId:
        return cls(uuid4())

    def __str__(self) -> str:
        return str(self.value)
