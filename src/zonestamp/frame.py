"""
Timestamp normalization for DataFrame columns.

Every cell of a column is scanned into a Timestamp under a ZonePolicy, or
rendered back to canonical text.
"""

from typing import Any

import pandas as pd

from zonestamp.codecs.sql import scan
from zonestamp.config.settings import UTC_POLICY, ZonePolicy
from zonestamp.timestamp import Timestamp
from zonestamp.utils.logging import get_logger, log_context

log = get_logger(__name__)


def _scan_cell(cell: Any, policy: ZonePolicy) -> Timestamp | None:
    if isinstance(cell, Timestamp):
        return cell.in_zone(policy.input_tz)
    if cell is None or (not isinstance(cell, str) and pd.isna(cell)):
        return None
    if isinstance(cell, pd.Timestamp):
        cell = cell.to_pydatetime()
    return scan(cell, policy)


def normalize_column(
    df: pd.DataFrame,
    column: str,
    policy: ZonePolicy = UTC_POLICY,
) -> pd.DataFrame:
    """
    Convert a column to Timestamps in the policy's input zone.

    Args:
        df: DataFrame with a column of text or datetimes.
        column: Name of the column.
        policy: Zone policy for zone-naive values.

    Returns:
        Copy of df; missing cells become None.
    """
    if column not in df.columns:
        log.warning("Timestamp column not found, skipping", column=column)
        return df

    df = df.copy()
    with log_context(column=column, zone=policy.input_zone):
        df[column] = pd.Series(
            [_scan_cell(cell, policy) for cell in df[column]],
            index=df.index,
            dtype=object,
        )
        log.info(
            "Normalized timestamp column",
            rows=len(df),
            missing=int(df[column].isna().sum()),
        )

    return df


def encode_column(
    df: pd.DataFrame,
    column: str,
    policy: ZonePolicy = UTC_POLICY,
) -> pd.DataFrame:
    """
    Render a column of Timestamps as text in the policy's output zone.

    Args:
        df: DataFrame whose column holds Timestamps (or None).
        column: Name of the column.
        policy: Output zone and layout.

    Returns:
        Copy of df with string cells; None stays None.
    """
    if column not in df.columns:
        log.warning("Timestamp column not found, skipping", column=column)
        return df

    df = df.copy()
    df[column] = pd.Series(
        [
            None if cell is None else cell.encode(policy.output_tz, policy.layout)
            for cell in df[column]
        ],
        index=df.index,
        dtype=object,
    )
    return df
