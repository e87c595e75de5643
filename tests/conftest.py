import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if SRC.exists() and str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


@pytest.fixture
def products():
    return [
        {"sku": "sku1", "name": "Product1", "categories": ["cat1"]},
        {"sku": "sku2", "name": "Product2", "categories": ["cat2"]},
    ]
