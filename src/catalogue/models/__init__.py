"""Wire contracts for the catalogue API."""

from .contracts import HealthStatus, Product  # noqa: F401
