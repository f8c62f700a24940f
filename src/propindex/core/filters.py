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
Exact filters applied to the candidates of a near location query.

The bounding-box prefilter only narrows the candidates down to a square.
Here the true distance from the query location to each candidate's midpoint
is computed, vectorised over all candidates, together with the attribute
thresholds.
'''
import collections
import math

import numpy
import toolz

from propindex.core.enclosing_geometry import Rect


PropertyFilter = collections.namedtuple(
    'PropertyFilter', 'max_price min_area min_bedrooms')
PropertyFilter.__new__.__defaults__ = (math.inf, 0., 0)


_EPS = numpy.finfo(float).eps


def _outward(c, half, sign):
    slack = 4 * _EPS * (abs(c) + half)
    return float(numpy.nextafter(c + sign * (half + slack), sign * math.inf))


def search_region(x, y, radius, truncate=False):
    """
    Square prefilter of a near location query.

    Encloses every midpoint whose distance to (x, y), as computed by
    :func:`center_distances`, passes the `radius` test. The half side is
    padded by a few ulps so that rounding in the midpoints and distances
    never puts a match outside. With `truncate`, a distance d passes
    whenever d < floor(radius) + 1.
    """
    half = radius
    if truncate and math.isfinite(radius):
        half = math.floor(radius) + 1.
    return Rect(_outward(x, half, -1), _outward(y, half, -1),
                _outward(x, half, 1), _outward(y, half, 1))


def centers(props):
    """Nx2 array of the midpoints of the listings' boxes."""
    if not props:
        return numpy.empty(shape=(0, 2))
    return numpy.array([p.box.centroid() for p in props], dtype=float)


def center_distances(x, y, props, truncate=False):
    """
    Distances from (x, y) to the midpoints of `props`.

    Parameters
    ----------
    x, y: float
        Query location.
    props: sequence of Property
    truncate: bool (default False)
        Drop the fractional part of the distances. Only for compatibility
        with indexes that compared integral distances.

    Returns
    -------
    1d float array, parallel to `props`.
    """
    ctr = centers(props)
    dist = numpy.hypot(ctr[:, 0] - x, ctr[:, 1] - y)
    if truncate:
        dist = numpy.trunc(dist)
    return dist


def attribute_mask(props, pfilter):
    """Boolean array of the listings passing the thresholds of `pfilter`."""
    if not props:
        return numpy.zeros(shape=0, dtype=bool)
    prices = numpy.fromiter(toolz.pluck(1, props), dtype=float,
                            count=len(props))
    areas = numpy.fromiter(toolz.pluck(2, props), dtype=float,
                           count=len(props))
    bedrooms = numpy.fromiter(toolz.pluck(3, props), dtype=numpy.int64,
                              count=len(props))
    return ((prices <= pfilter.max_price)
            & (areas >= pfilter.min_area)
            & (bedrooms >= pfilter.min_bedrooms))


def near_mask(x, y, radius, props, pfilter, truncate=False):
    """Boolean array of the listings within `radius` of (x, y) and passing
    `pfilter`."""
    props = list(props)
    within = center_distances(x, y, props, truncate=truncate) <= radius
    return within & attribute_mask(props, pfilter)


def select(props, mask):
    """Keep the listings of `props` where `mask` is set, in order."""
    return [p for p, keep in zip(props, mask) if keep]
