# src/region_index/loader/records.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from region_index.core.exceptions import RecordFormatError

# A parent_code equal to this attaches the record directly under the synthetic root.
ROOT_PARENT_SENTINEL = "0"

# Reserved code of the synthetic root; never accepted from input.
ROOT_CODE = "000000000000"
ROOT_NAME = "中华人民共和国"
ROOT_LEVEL = 0

MAX_CODE_LENGTH = 19
MAX_NAME_LENGTH = 100
MIN_LEVEL = 0
MAX_LEVEL = 5

LEVEL_NAMES = (
    "National",
    "Provincial",
    "Prefecture",
    "County",
    "Township",
    "Village",
)


def level_name(level: int) -> str:
    """Return a display name for an administrative level."""
    if MIN_LEVEL <= level <= MAX_LEVEL:
        return LEVEL_NAMES[level]
    return f"Unknown({level})"


@dataclass(frozen=True)
class Region:
    """
    One administrative region as supplied by the record store.

    Attributes:
        code: Unique region code, digits only (e.g. "110101000000").
        name: Display name, e.g. "Dongcheng".
        level: Administrative level 0-5; 0 is reserved for the synthetic root.
        parent_code: Code of the parent region, or "0" for top-level regions.
        type: Opaque classification number.
        avg_house_price: Optional numeric extension value.
        employment_rate: Optional textual extension value.

    At most one of the extension values is set. ``None`` means the data is
    absent, which is not the same as a zero price.
    """

    code: str
    name: str
    level: int
    parent_code: str
    type: int = 0
    avg_house_price: Optional[float] = None
    employment_rate: Optional[str] = None

    def __post_init__(self) -> None:
        if self.avg_house_price is not None and self.employment_rate is not None:
            raise RecordFormatError(
                f"Region {self.code}: avg_house_price and employment_rate are mutually exclusive"
            )

    @property
    def extension(self) -> Optional[Union[float, str]]:
        if self.avg_house_price is not None:
            return self.avg_house_price
        return self.employment_rate

    @property
    def is_top_level(self) -> bool:
        return self.parent_code == ROOT_PARENT_SENTINEL


def make_root_region(name: Optional[str] = None) -> Region:
    """Manufacture the record wrapped by the synthetic root node."""
    return Region(
        code=ROOT_CODE,
        name=name or ROOT_NAME,
        level=ROOT_LEVEL,
        parent_code=ROOT_PARENT_SENTINEL,
        type=0,
    )
