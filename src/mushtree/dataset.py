# -*- coding: utf-8 -*-
"""
mushtree.dataset
================

Loading the mushroom CSV and splitting it into training and test sets.

File format: comma-separated text with one header row (ignored), then rows of
23 fields.  Field 0 is the label, ``EDIBLE`` (case-insensitive) meaning edible
and anything else poisonous.  Fields 1..22 are the attributes in the order of
:data:`~mushtree.records.ATTRIBUTE_NAMES`.  Rows with fewer than 23 fields are
skipped; extra trailing fields are ignored.  Values are kept as raw strings.
"""

from __future__ import annotations

import os
import warnings
from collections.abc import Sequence
from typing import Any

import pandas as pd
from loguru import logger
from sklearn.model_selection import train_test_split

from .records import ATTRIBUTE_NAMES, EDIBLE, MushroomRecord

N_FIELDS = len(ATTRIBUTE_NAMES) + 1
LABEL_COLUMN = "EDIBLE"
COLUMNS: list[str] = [LABEL_COLUMN, *ATTRIBUTE_NAMES]
DEFAULT_TRAIN_RATIO = 0.6


def load_records(path: str | os.PathLike) -> list[MushroomRecord]:
    """
    Read mushroom records from a CSV file.

    Parameters
    ----------
    path : str or path-like
        Location of the CSV file.

    Returns
    -------
    list[MushroomRecord]
        One record per well-formed row, in file order.
    """
    with warnings.catch_warnings():
        # over-long rows are truncated on purpose
        warnings.simplefilter("ignore", pd.errors.ParserWarning)
        frame = pd.read_csv(
            path,
            header=None,
            skiprows=1,
            names=COLUMNS,
            index_col=False,
            dtype=object,
            keep_default_na=False,
            skip_blank_lines=True,
            engine="python",
            # keep the first 23 fields of over-long rows
            on_bad_lines=lambda fields: fields[:N_FIELDS],
        )
    # short rows are padded with NaN by the parser; real empty fields stay ""
    complete = frame.dropna()
    n_skipped = len(frame) - len(complete)
    if n_skipped:
        logger.debug("Skipped {} rows with fewer than {} fields in {}", n_skipped, N_FIELDS, path)
    records = records_from_frame(complete)
    logger.info("Loaded {} mushroom records from {}", len(records), path)
    return records


def records_from_frame(frame: pd.DataFrame) -> list[MushroomRecord]:
    """
    Convert a 23-column frame (label first, attributes in canonical order).

    Column names are ignored; only position matters.
    """
    if frame.shape[1] < N_FIELDS:
        raise ValueError(f"expected at least {N_FIELDS} columns, got {frame.shape[1]}")
    values = frame.iloc[:, :N_FIELDS].astype(str).to_numpy()
    return [
        MushroomRecord.from_values(row[0].upper() == EDIBLE, list(row[1:]))
        for row in values
    ]


def split_train_test(records: Sequence[Any], train_ratio: float = DEFAULT_TRAIN_RATIO, *,
                     random_state: int | None = None) -> tuple[list, list]:
    """
    Shuffle ``records`` and split them into training and test lists.

    Parameters
    ----------
    records : sequence
        Records to split.
    train_ratio : float, default=0.6
        Fraction in (0, 1) of records that go to the training list.  The
        training list gets ``floor(len(records) * train_ratio)`` records.
    random_state : int or None, default=None
        Seed for the shuffle.

    Returns
    -------
    tuple[list, list]
        ``(train, test)``.
    """
    if not 0.0 < train_ratio < 1.0:
        raise ValueError(f"train_ratio must be in (0, 1), got {train_ratio}")
    records = list(records)
    train, test = train_test_split(records, train_size=train_ratio, shuffle=True,
                                   random_state=random_state)
    logger.debug("Split {} records into {} train / {} test", len(records), len(train), len(test))
    return list(train), list(test)
