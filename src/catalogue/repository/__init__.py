from .memory import InMemoryProductStore  # noqa: F401
from .mongo import MongoProductStore  # noqa: F401
from .store import ProductStore  # noqa: F401
