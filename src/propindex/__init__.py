"""
In-memory spatial indexing of property listings.

Listings are stored with their bounding rectangle in a single-level tree of
bounding boxes. Two queries are supported: rectangular range queries, and
near location queries which combine a bounding-box prefilter with exact
distance and attribute filters.

The tree is deliberately flat: each insertion appends to the root (or to a
fresh leaf below it) and grows the bounds along the way. There is no
splitting nor balancing, and pruning happens on the bounding boxes of the
nodes visited.
"""
from .core.enclosing_geometry import Rect, as_rect  # noqa: F401
from .core.errors import (  # noqa: F401
    PropIndexError, InvalidGeometry, InvalidAttribute)
from .core.records import Property  # noqa: F401
from .config import IndexConfig  # noqa: F401
from .index import PropertyIndex  # noqa: F401

__version__ = "0.3.0"
