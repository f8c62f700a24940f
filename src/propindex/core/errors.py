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
Exceptions raised on malformed caller input.
'''


class PropIndexError(ValueError):
    """Base class of the input errors raised by the index."""


class InvalidGeometry(PropIndexError):
    """A rectangle or a location is malformed (min exceeds max, NaN...)."""


class InvalidAttribute(PropIndexError):
    """A property attribute or a query threshold is out of its domain."""
