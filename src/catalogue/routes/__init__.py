from . import health, products, search  # noqa: F401
