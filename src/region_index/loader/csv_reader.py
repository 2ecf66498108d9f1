# src/region_index/loader/csv_reader.py

from __future__ import annotations

import csv
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Optional, Sequence, Tuple, Union

from region_index.core.exceptions import RecordFormatError
from region_index.logging import get_logger

from .records import (
    MAX_CODE_LENGTH,
    MAX_LEVEL,
    MAX_NAME_LENGTH,
    MIN_LEVEL,
    ROOT_CODE,
    ROOT_PARENT_SENTINEL,
    Region,
)

log = get_logger(__name__)

DEFAULT_MAX_RECORDS = 700000
REQUIRED_FIELDS = 5
MISSING_MARKERS = {"", "N/A"}


@dataclass
class RegionLoad:
    """
    Result of reading a region CSV file.

    Attributes:
        records: Valid records in file order.
        rejected: (lineno, reason) for every malformed row that was skipped.
        header_skipped: True when the first row was treated as a header.
    """

    records: List[Region] = field(default_factory=list)
    rejected: List[Tuple[int, str]] = field(default_factory=list)
    header_skipped: bool = False

    def __len__(self) -> int:  # pragma: no cover - trivial wrapper
        return len(self.records)


def _is_digits(value: str) -> bool:
    return value.isascii() and value.isdigit()


def _looks_like_record(fields: Sequence[str]) -> bool:
    return bool(fields) and _is_digits(fields[0].strip())


def _parse_int(value: str, column: str, lineno: int) -> int:
    try:
        return int(value.strip())
    except ValueError:
        raise RecordFormatError(
            f"Line {lineno}: {column} is not an integer -> {value!r}"
        ) from None


def _optional_text(fields: Sequence[str], position: int) -> Optional[str]:
    if len(fields) <= position:
        return None
    value = fields[position].strip()
    return None if value in MISSING_MARKERS else value


def parse_row(fields: Sequence[str], lineno: int = 0) -> Region:
    """
    Convert one CSV row into a Region.

    Expected column order:
        code, name, level, parent_code, type[, avg_house_price[, employment_rate]]

    Raises:
        RecordFormatError: if any column violates the record contract.
    """
    if len(fields) < REQUIRED_FIELDS:
        raise RecordFormatError(
            f"Line {lineno}: expected at least {REQUIRED_FIELDS} columns, got {len(fields)}"
        )

    code = fields[0].strip()
    if not code or not _is_digits(code) or len(code) > MAX_CODE_LENGTH:
        raise RecordFormatError(f"Line {lineno}: invalid code {code!r}")
    if code == ROOT_CODE:
        raise RecordFormatError(f"Line {lineno}: code {code!r} is reserved for the root")

    name = fields[1].strip()
    if not name or len(name) >= MAX_NAME_LENGTH:
        raise RecordFormatError(f"Line {lineno}: invalid name {fields[1]!r}")

    level = _parse_int(fields[2], "level", lineno)
    if not MIN_LEVEL <= level <= MAX_LEVEL:
        raise RecordFormatError(f"Line {lineno}: level {level} out of range")

    parent_code = fields[3].strip()
    if parent_code != ROOT_PARENT_SENTINEL and (
        not _is_digits(parent_code) or len(parent_code) > MAX_CODE_LENGTH
    ):
        raise RecordFormatError(f"Line {lineno}: invalid parent code {parent_code!r}")

    region_type = _parse_int(fields[4], "type", lineno)

    price: Optional[float] = None
    price_text = _optional_text(fields, 5)
    if price_text is not None:
        try:
            price = float(price_text)
        except ValueError:
            raise RecordFormatError(
                f"Line {lineno}: avg_house_price is not numeric -> {price_text!r}"
            ) from None

    rate = _optional_text(fields, 6)

    return Region(
        code=code,
        name=name,
        level=level,
        parent_code=parent_code,
        type=region_type,
        avg_house_price=price,
        employment_rate=rate,
    )


def iter_rows(path: Union[str, Path]) -> Iterator[Tuple[int, List[str]]]:
    """Yield (lineno, fields) for every non-blank CSV row."""
    file_path = Path(path)

    if not file_path.is_file():
        raise FileNotFoundError(f"Region file not found: {file_path}")

    with file_path.open("r", encoding="utf-8-sig", newline="") as f:
        reader = csv.reader(f)
        for fields in reader:
            if not any(cell.strip() for cell in fields):
                continue
            yield reader.line_num, fields


def read_regions(
    path: Union[str, Path],
    *,
    strict: bool = False,
    max_records: int = DEFAULT_MAX_RECORDS,
) -> RegionLoad:
    """
    Read a region CSV file into validated records.

    The first row is treated as a header when it does not parse as a record
    and its code cell is not a digit string; a malformed first row that starts
    with a code is rejected like any other bad row.
    Later malformed rows are skipped and reported in ``RegionLoad.rejected``,
    or raise immediately when ``strict`` is set.

    Raises:
        FileNotFoundError: if ``path`` does not exist.
        RecordFormatError: in strict mode, on the first malformed row.
    """
    result = RegionLoad()
    first = True

    for lineno, fields in iter_rows(path):
        if len(result.records) >= max_records:
            log.warning("Record cap of %d reached; remaining rows ignored", max_records)
            break

        try:
            region = parse_row(fields, lineno)
        except RecordFormatError as exc:
            if first and not _looks_like_record(fields):
                first = False
                result.header_skipped = True
                log.debug("Treating line %d as header: %s", lineno, fields)
                continue
            if first:
                log.warning("First row is a malformed record, not a header: %s", exc)
            first = False
            if strict:
                raise
            log.warning("Skipping malformed row: %s", exc)
            result.rejected.append((lineno, str(exc)))
            continue

        first = False
        result.records.append(region)

    log.info(
        "Loaded %d regions from %s (rejected=%d)",
        len(result.records),
        path,
        len(result.rejected),
    )
    return result
