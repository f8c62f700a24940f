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
Bounding rectangles.

The index only ever reasons about axis-aligned bounding rectangles: the
extent of a listing (usually a degenerate rectangle, i.e. its address) and
the extent of a node enclosing all of its contents. Both are closed
rectangles, so touching boundaries count as an intersection.
'''
import collections
import math

import numpy
import shapely.geometry

from propindex.core.errors import InvalidGeometry


# Dispatching bound_all to its class method
def bound_all(rects):
    rects = list(rects)
    if not rects:
        raise ValueError("Cannot bound an empty collection of rectangles.")
    # Get the class of first value in rects.
    cls = type(rects[0])
    return cls.merge(rects)


def as_rect(obj):
    """
    Coerce `obj` into a :class:`Rect`.

    Accepted are rectangles, sequences of 4 coordinates
    (x_min, y_min, x_max, y_max) and anything exposing shapely's `bounds`
    attribute, such as a `shapely.geometry.Point`.

    Raises
    ------
    InvalidGeometry
        If `obj` cannot be read as 4 coordinates.
    """
    bounds = getattr(obj, 'bounds', obj)
    if isinstance(bounds, (str, bytes)):
        raise InvalidGeometry(
            "Cannot interpret {!r} as a rectangle.".format(obj))
    try:
        coords = tuple(float(c) for c in bounds)
    except (TypeError, ValueError) as exc:
        raise InvalidGeometry(
            "Cannot interpret {!r} as a rectangle.".format(obj)) from exc
    if len(coords) != 4:
        raise InvalidGeometry(
            "A rectangle needs 4 coordinates (x_min, y_min, x_max, y_max), "
            "got {}.".format(len(coords))
        )
    return Rect(*coords)


_RectBase = collections.namedtuple('Rect_', 'x_min y_min x_max y_max')


class Rect(_RectBase):
    '''Axis-aligned bounding rectangle.'''
    __slots__ = ()

    @staticmethod
    def merge(collection):
        arr = numpy.array([tuple(r) for r in collection], dtype=float)
        if arr.size == 0:
            raise ValueError("Cannot merge an empty collection of rectangles.")
        mins = arr[:, :2].min(0)
        maxs = arr[:, 2:].max(0)
        return Rect(*mins.tolist(), *maxs.tolist())

    @classmethod
    def from_point(cls, x, y):
        return cls(x, y, x, y)

    def __repr__(self):
        return ("Rect(x_min={}, y_min={}, x_max={}, y_max={})"
                .format(*self))

    def validate(self):
        """Returns `self` if it is a real region, else raises
        :class:`InvalidGeometry`."""
        if any(math.isnan(c) for c in self):
            raise InvalidGeometry("NaN coordinate in {!r}.".format(self))
        if self.x_min > self.x_max:
            raise InvalidGeometry(
                "x_min {} exceeds x_max {}.".format(self.x_min, self.x_max))
        if self.y_min > self.y_max:
            raise InvalidGeometry(
                "y_min {} exceeds y_max {}.".format(self.y_min, self.y_max))
        return self

    def intersects(self, other):
        return not (self.x_min > other.x_max or self.x_max < other.x_min
                    or self.y_min > other.y_max or self.y_max < other.y_min)

    def contains(self, other):
        return (self.x_min <= other.x_min and self.y_min <= other.y_min
                and self.x_max >= other.x_max and self.y_max >= other.y_max)

    def union(self, other):
        return Rect(min(self.x_min, other.x_min), min(self.y_min, other.y_min),
                    max(self.x_max, other.x_max), max(self.y_max, other.y_max))

    def centroid(self):
        """Returns the midpoint of the rectangle as a (x, y) tuple."""
        return (0.5 * self.x_min + 0.5 * self.x_max,
                0.5 * self.y_min + 0.5 * self.y_max)

    def to_shapely(self):
        return shapely.geometry.box(*self)
