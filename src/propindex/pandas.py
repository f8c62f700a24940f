"""
Module wrapping pandas DataFrames.

Listings are exchanged as frames with the columns :data:`COLUMNS`. On input,
point listings may give `x` and `y` instead of the four box columns.
"""
import logging

import pandas
import toolz

from propindex.core.records import Property
from propindex.core.enclosing_geometry import Rect
from propindex.index import PropertyIndex

logger = logging.getLogger(__name__)

ATTRIBUTES = ['location', 'price', 'area', 'bedrooms']
BOX_COLUMNS = ['x_min', 'y_min', 'x_max', 'y_max']
POINT_COLUMNS = ['x', 'y']
COLUMNS = ATTRIBUTES + BOX_COLUMNS


def _boxes(frame):
    if set(BOX_COLUMNS) <= set(frame.columns):
        return [Rect(*row) for row in
                frame[BOX_COLUMNS].itertuples(index=False, name=None)]
    if set(POINT_COLUMNS) <= set(frame.columns):
        return [Rect.from_point(x, y) for x, y in
                frame[POINT_COLUMNS].itertuples(index=False, name=None)]
    raise ValueError(
        "Frame must have either the columns {} or {}."
        .format(BOX_COLUMNS, POINT_COLUMNS)
    )


def frame_to_properties(frame):
    """
    Build the listings of `frame`, one per row in row order.

    Parameters
    ----------
    frame: pandas DataFrame

    Returns
    -------
    list of Property
    """
    missing = [c for c in ATTRIBUTES if c not in frame.columns]
    if missing:
        raise ValueError("Frame is missing the columns {}.".format(missing))
    boxes = _boxes(frame)
    rows = frame[ATTRIBUTES].itertuples(index=False, name=None)
    return [Property(str(loc), price, area, bedrooms, box)
            for (loc, price, area, bedrooms), box in zip(rows, boxes)]


def from_frame(frame, index=None, config=None):
    """
    Bulk load the listings of `frame`.

    All rows are validated before any is inserted.

    Parameters
    ----------
    frame: pandas DataFrame
    index: PropertyIndex, optional
        Index to load into. A new one, built with `config`, by default.
    config: IndexConfig, optional

    Returns
    -------
    PropertyIndex
    """
    if index is None:
        index = PropertyIndex(config)
    props = frame_to_properties(frame)
    index.bulk_insert(props)
    logger.debug(f"Loaded {len(props)} properties from frame")
    return index


def read_csv(path, index=None, config=None, **kwargs):
    """`pandas.read_csv` followed by :func:`from_frame`."""
    return from_frame(pandas.read_csv(path, **kwargs), index=index,
                      config=config)


def to_frame(props):
    """
    Tabulate listings, e.g. a query result, in order.

    Returns
    -------
    pandas DataFrame with the columns :data:`COLUMNS`.
    """
    rows = [list(toolz.concat([p[:4], p.box])) for p in props]
    return pandas.DataFrame(rows, columns=COLUMNS)
