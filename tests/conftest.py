import sys
from pathlib import Path

import pytest

# Ensure the project src directory is on sys.path for test imports
PROJECT_ROOT = Path(__file__).resolve().parent.parent
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from region_index.loader.records import Region  # noqa: E402


def region(code, parent_code, name, level=1, **kwargs):
    """Shorthand for building test records."""
    return Region(code=code, name=name, level=level, parent_code=parent_code, **kwargs)


@pytest.fixture
def beijing_records():
    return [
        region("11", "0", "Beijing", 1),
        region("1101", "11", "Dongcheng", 2),
    ]


@pytest.fixture
def province_records():
    """Two provinces with cities and districts, children listed out of code order."""
    return [
        region("13", "0", "Hebei", 1),
        region("1302", "13", "Tangshan", 2),
        region("11", "0", "Beijing", 1),
        region("1301", "13", "Shijiazhuang", 2),
        region("130102", "1301", "Chang'an", 3),
        region("1101", "11", "Dongcheng", 2),
        region("110101", "1101", "Donghuamen", 3),
        region("130201", "1302", "Lunan", 3),
    ]
