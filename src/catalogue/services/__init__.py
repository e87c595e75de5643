from .catalogue import CatalogueService  # noqa: F401
