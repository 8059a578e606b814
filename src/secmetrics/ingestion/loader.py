"""
CSV dataset loading.

Reads the EDR and vulnerability exports with pandas and converts each row
into a typed record. Parsing follows the export format:
- First row holds the field names
- Blank rows are skipped
- Numeric values are inferred from their text
- Only empty cells count as missing ("None", "N/A" are kept as labels)
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import pandas as pd

from secmetrics.core.exceptions import DataLoadError
from secmetrics.edr.models import AlertRecord
from secmetrics.vulnerabilities.models import VulnerabilityRecord

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

EDR_SOURCE = "edr"
VULNERABILITIES_SOURCE = "vulnerabilities"

# Record field -> CSV header
EDR_COLUMNS = {
    "severity": "Severity",
    "ioc_type": "IOCType",
    "alert_type": "AlertType",
    "status": "Status",
    "hostname": "Hostname",
}

VULNERABILITY_COLUMNS = {
    "severity": "Severity",
    "status": "Status",
    "detection_source": "DetectionSource",
    "detection_date": "DetectionDate",
    "patch_applied_date": "PatchAppliedDate",
    "is_critical": "IsCritical",
    "is_patchable": "IsPatchable",
    "asset_id": "AssetID",
    "recommended_timeframe_days": "RecommendedTimeframe",
}

TRUE_FLAGS = frozenset({"oui", "yes", "y", "true", "1", "1.0"})
FALSE_FLAGS = frozenset({"non", "no", "n", "false", "0", "0.0"})


def read_table(path: PathLike, source: str) -> pd.DataFrame:
    """
    Read a delimited file with a header row into a DataFrame.

    Args:
        path: CSV file path
        source: Dataset name, used in error messages

    Returns:
        DataFrame without fully blank rows

    Raises:
        DataLoadError: If the file is missing or cannot be parsed
    """
    try:
        df = pd.read_csv(
            path,
            header=0,
            skip_blank_lines=True,
            keep_default_na=False,
            na_values=[""],
        )
    except FileNotFoundError as e:
        raise DataLoadError(source, str(path), "file not found") from e
    except pd.errors.EmptyDataError as e:
        raise DataLoadError(source, str(path), "file is empty") from e
    except (pd.errors.ParserError, UnicodeDecodeError, OSError) as e:
        raise DataLoadError(source, str(path), str(e)) from e

    df = df.dropna(how="all")
    logger.debug(f"Read {len(df)} {source} rows from {path} (columns: {list(df.columns)})")
    return df


def load_alert_records(path: PathLike) -> List[AlertRecord]:
    """
    Load EDR alerts from a CSV export.

    Args:
        path: CSV file path

    Returns:
        One AlertRecord per non-blank row
    """
    df = read_table(path, EDR_SOURCE)
    rows = df.to_dict(orient="records")

    records = [
        AlertRecord(**{field: _text(row.get(column)) for field, column in EDR_COLUMNS.items()})
        for row in rows
    ]

    logger.info(f"Loaded {len(records)} EDR alerts from {path}")
    return records


def load_vulnerability_records(path: PathLike) -> List[VulnerabilityRecord]:
    """
    Load vulnerability records from a CSV export.

    Args:
        path: CSV file path

    Returns:
        One VulnerabilityRecord per non-blank row
    """
    df = read_table(path, VULNERABILITIES_SOURCE)

    for field in ("detection_date", "patch_applied_date"):
        column = VULNERABILITY_COLUMNS[field]
        if column in df.columns:
            df[column] = _parse_dates(df[column])

    records = [
        _vulnerability_from_row(row, index)
        for index, row in enumerate(df.to_dict(orient="records"))
    ]

    logger.info(f"Loaded {len(records)} vulnerability records from {path}")
    return records


def _vulnerability_from_row(row: Dict[str, Any], index: int) -> VulnerabilityRecord:
    columns = VULNERABILITY_COLUMNS
    timeframe, timeframe_unreadable = _timeframe(row.get(columns["recommended_timeframe_days"]), index)
    return VulnerabilityRecord(
        severity=_text(row.get(columns["severity"])),
        status=_text(row.get(columns["status"])),
        detection_source=_text(row.get(columns["detection_source"])),
        detection_date=_timestamp(row.get(columns["detection_date"])),
        patch_applied_date=_timestamp(row.get(columns["patch_applied_date"])),
        is_critical=_flag(row.get(columns["is_critical"]), default=False),
        is_patchable=_flag(row.get(columns["is_patchable"]), default=True),
        asset_id=_text(row.get(columns["asset_id"])),
        recommended_timeframe_days=timeframe,
        timeframe_unreadable=timeframe_unreadable,
    )


def _parse_dates(series: pd.Series) -> pd.Series:
    """Parse a column of dates; unparsable values become NaT. Result is naive UTC."""
    parsed = pd.to_datetime(series, errors="coerce", utc=True, format="mixed")
    return parsed.dt.tz_localize(None)


def _is_missing(value: Any) -> bool:
    return value is None or (not isinstance(value, str) and bool(pd.isna(value)))


def _text(value: Any) -> str:
    """Normalize a cell to text; missing cells become ''."""
    if _is_missing(value):
        return ""
    # Numeric inference turns "101" into 101.0 when the column has blanks
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _timestamp(value: Any) -> Optional[datetime]:
    if _is_missing(value):
        return None
    return pd.Timestamp(value).to_pydatetime()


def _flag(value: Any, default: bool) -> bool:
    """Interpret a boolean-like cell (Oui/Non, Yes/No, True/False, 1/0)."""
    if _is_missing(value):
        return default
    text = str(value).strip().lower()
    if text in TRUE_FLAGS:
        return True
    if text in FALSE_FLAGS:
        return False
    return default


def _timeframe(value: Any, index: int) -> Tuple[Optional[float], bool]:
    """
    Recommended timeframe in days, and whether the cell was unreadable.

    Missing or zero means no deadline. Non-numeric text is a deadline that
    can never be met.
    """
    if _is_missing(value):
        return None, False
    try:
        days = float(value)
    except (TypeError, ValueError):
        logger.warning(f"Row {index}: non-numeric recommended timeframe {value!r}, counting as late")
        return None, True
    if pd.isna(days) or days == 0:
        return None, False
    return days, False
