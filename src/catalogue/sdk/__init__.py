from .client import CatalogueServiceClient  # noqa: F401
