# Copyright (C) 2018 DataStorm
#
# This file is part of PropIndex.
#
# PropIndex is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# PropIndex is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# A copy of the GNU General Public License is available in the LICENSE
# file or at <http://www.gnu.org/licenses/>.
'''
Spatial index of property listings.

:class:`PropertyIndex` is the only entry point to the tree of
:mod:`propindex.core.spatial_index`: it validates caller input, then
delegates to the insertion and query visitors.
'''
import contextlib
import functools
import logging
import math
import numbers
import threading

from propindex.config import IndexConfig
from propindex.core import filters
from propindex.core import spatial_index
from propindex.core.enclosing_geometry import as_rect
from propindex.core.errors import InvalidGeometry
from propindex.core.records import (
    check_count, check_non_negative, make_property, validate_property)

logger = logging.getLogger(__name__)


def _locked(method):
    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        with self._lock:
            return method(self, *args, **kwargs)
    return wrapper


def _check_coordinate(name, value):
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidGeometry(
            "{} must be a real number, got {!r}.".format(name, value))
    value = float(value)
    if not math.isfinite(value):
        raise InvalidGeometry(
            "{} must be finite, got {}.".format(name, value))
    return value


class PropertyIndex():
    """
    In-memory spatial index of property listings.

    The root node is created with the configured universe as bounds. Its
    bounds grow to enclose every inserted listing, so that pruning on the
    root never hides a match.

    Parameters
    ----------
    config: IndexConfig, optional
        Defaults to ``IndexConfig()``.
    """
    def __init__(self, config=None):
        self.config = IndexConfig() if config is None else config
        universe = as_rect(self.config.universe)
        if self.config.root == "leaf":
            self._root = spatial_index.LeafNode(universe)
        else:
            self._root = spatial_index.InternalNode(universe)
        self._count = 0
        self._lock = (threading.RLock() if self.config.thread_safe
                      else contextlib.nullcontext())

    def __repr__(self):
        return "<{} properties={} bounds={!r}>".format(
            self.__class__.__name__, self._count, self._root.bounds)

    def __len__(self):
        """Returns the number of properties."""
        return self._count

    @_locked
    def __iter__(self):
        return iter(list(self._root.accept(spatial_index.Collect())))

    @property
    def is_empty(self):
        """Boolean: Is the index empty?"""
        return self._count == 0

    @property
    def bounds(self):
        """Bounds of the root node."""
        return self._root.bounds

    @property
    def depth(self):
        """Number of node levels."""
        return spatial_index.depth(self._root)

    def nodes(self):
        '''Depth-first iteration over the tree's nodes.'''
        return spatial_index.walk(self._root)

    # ---------- mutation ----------

    def insert(self, location, price, area, bedrooms, box):
        """
        Insert a listing.

        Parameters
        ----------
        location: str
        price: non-negative real
        area: non-negative real
        bedrooms: non-negative int
        box: Rect, 4-sequence or shapely geometry

        Returns
        -------
        Property
            The stored listing.

        Raises
        ------
        InvalidGeometry, InvalidAttribute
            On malformed input, in which case the index is unchanged.
        """
        prop = make_property(location, price, area, bedrooms, box)
        return self._insert(prop)

    def insert_property(self, prop):
        '''Insert an existing :class:`Property` after validating it.'''
        return self._insert(validate_property(prop))

    def bulk_insert(self, props):
        """
        Insert many listings, all or nothing.

        Every listing is validated before the first one is inserted.

        Returns
        -------
        list of Property
        """
        valid = [validate_property(p) for p in props]
        with self._lock:
            for prop in valid:
                self._root.accept(spatial_index.Insert(), prop)
            self._count += len(valid)
        logger.debug(f"Bulk inserted {len(valid)} properties, "
                     f"bounds now {self._root.bounds!r}")
        return valid

    @_locked
    def _insert(self, prop):
        self._root.accept(spatial_index.Insert(), prop)
        self._count += 1
        logger.debug(f"Inserted {prop.location!r} at {prop.box!r}")
        return prop

    # ---------- queries ----------

    @_locked
    def range_query(self, region):
        """
        Properties whose box intersects `region`, in insertion order.

        Parameters
        ----------
        region: Rect, 4-sequence or shapely geometry

        Returns
        -------
        list of Property
        """
        region = as_rect(region).validate()
        return list(self._root.accept(spatial_index.Intersection(), region))

    @_locked
    def near_location_query(self, x, y, radius, max_price=math.inf,
                            min_area=0., min_bedrooms=0):
        """
        Properties whose box midpoint lies within `radius` of (x, y) and
        satisfying the price, area and bedrooms thresholds.

        Candidates are first narrowed down by a range query on a square
        slightly larger than the one of side 2 * `radius` centered on (x, y),
        unless the prefilter is disabled in the config. The result does not
        depend on it.

        Returns
        -------
        list of Property, in insertion order.
        """
        x = _check_coordinate('x', x)
        y = _check_coordinate('y', y)
        radius = check_non_negative('radius', radius)
        pfilter = filters.PropertyFilter(
            max_price=check_non_negative('max_price', max_price),
            min_area=check_non_negative('min_area', min_area),
            min_bedrooms=check_count('min_bedrooms', min_bedrooms),
        )
        if self.config.use_prefilter:
            region = filters.search_region(
                x, y, radius, truncate=self.config.truncate_distance)
            candidates = self.range_query(region)
        else:
            candidates = list(self._root.accept(spatial_index.Collect()))
        mask = filters.near_mask(x, y, radius, candidates, pfilter,
                                 truncate=self.config.truncate_distance)
        result = filters.select(candidates, mask)
        logger.debug(f"Near ({x}, {y}) r={radius}: {len(candidates)} "
                     f"candidates, {len(result)} matches")
        return result
