from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class Product(BaseModel):
    """Catalogue product as stored by the upstream writer.

    Only ``sku``, ``name`` and ``categories`` are interpreted; every other
    field is carried through untouched.
    """

    model_config = ConfigDict(extra="allow")

    sku: str
    name: str
    categories: List[str] = Field(default_factory=list)


class HealthStatus(BaseModel):
    app: str = "OK"
    mongo: bool
