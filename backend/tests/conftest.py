import sys
from pathlib import Path

import pytest

# Make backend/ importable (api, domain, repositories, ...) for direct pytest runs
BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))


@pytest.fixture()
def places_file(tmp_path):
    """Backing file for a store or app under test; does not exist yet."""
    return tmp_path / "places.json"
