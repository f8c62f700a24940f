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
"""
Property listings stored in the index.

A :class:`Property` is immutable: once inserted it is owned by the node
holding it, and queries hand back the very same values.
"""
import collections
import math
import numbers

from propindex.core.enclosing_geometry import as_rect
from propindex.core.errors import InvalidAttribute


_PropertyBase = collections.namedtuple(
    'Property_', 'location price area bedrooms box')


class Property(_PropertyBase):
    """
    A listing and its bounding rectangle.

    Attributes
    ----------
    location: str
        Free text address or description.
    price: float
    area: float
    bedrooms: int
    box: Rect
        Spatial extent of the listing, usually a point.
    """
    __slots__ = ()

    def __repr__(self):
        return ("Property(location={!r}, price={}, area={}, bedrooms={}, "
                "box={!r})".format(*self))

    @property
    def center(self):
        return self.box.centroid()


def check_non_negative(name, value):
    """Returns `value` as a float, raising :class:`InvalidAttribute` if it is
    not a non-negative real number."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidAttribute(
            "{} must be a real number, got {!r}.".format(name, value))
    value = float(value)
    if math.isnan(value) or value < 0:
        raise InvalidAttribute(
            "{} must be non-negative, got {}.".format(name, value))
    return value


def check_count(name, value):
    """Returns `value` as an int, raising :class:`InvalidAttribute` if it is
    not a non-negative integer."""
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidAttribute(
            "{} must be an integer, got {!r}.".format(name, value))
    value = int(value)
    if value < 0:
        raise InvalidAttribute(
            "{} must be non-negative, got {}.".format(name, value))
    return value


def make_property(location, price, area, bedrooms, box):
    """
    Validate the fields of a listing and build the :class:`Property`.

    Raises
    ------
    InvalidGeometry
        If `box` is not a real region.
    InvalidAttribute
        If an attribute is out of its domain.
    """
    if not isinstance(location, str):
        raise InvalidAttribute(
            "location must be a string, got {!r}.".format(location))
    return Property(
        location=location,
        price=check_non_negative('price', price),
        area=check_non_negative('area', area),
        bedrooms=check_count('bedrooms', bedrooms),
        box=as_rect(box).validate(),
    )


def validate_property(prop):
    """Re-validate an existing listing, returning a normalized copy."""
    return make_property(*prop)
