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
Index configuration.

Settings are chosen once, before the first insert, and can be given
directly, from a mapping or from environment variables.
"""
import dataclasses
import logging
import os
from typing import Any, Dict, Mapping, Optional, Tuple

from propindex.core.enclosing_geometry import as_rect

logger = logging.getLogger(__name__)

ROOT_KINDS = ("leaf", "internal")
DEFAULT_UNIVERSE = (0., 0., 100., 100.)
_TRUE_STRINGS = ("1", "true", "yes", "on")


@dataclasses.dataclass
class IndexConfig:
    """
    Configuration of a :class:`propindex.index.PropertyIndex`.

    Attributes
    ----------
    universe: initial bounds of the root node, (x_min, y_min, x_max, y_max).
    root: "leaf" keeps all properties in the root's item list, "internal"
        wraps each property in its own leaf child of the root.
    use_prefilter: narrow near location queries with a square range query
        before computing exact distances.
    truncate_distance: drop the fractional part of distances before
        comparing them to the radius. Legacy behaviour, off by default.
    thread_safe: serialize all operations with a single lock.
    """
    universe: Tuple[float, float, float, float] = DEFAULT_UNIVERSE
    root: str = "leaf"
    use_prefilter: bool = True
    truncate_distance: bool = False
    thread_safe: bool = False

    def __post_init__(self):
        self.universe = as_rect(self.universe).validate()
        if self.root not in ROOT_KINDS:
            raise ValueError("root must be one of {}, got {!r}."
                             .format(ROOT_KINDS, self.root))

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]) -> "IndexConfig":
        """Build a config from `values`, ignoring unknown keys."""
        names = {f.name for f in dataclasses.fields(cls)}
        unknown = set(values) - names
        if unknown:
            logger.warning(f"Ignoring unknown config keys: {sorted(unknown)}")
        return cls(**{k: v for k, v in values.items() if k in names})

    @classmethod
    def from_env(cls, prefix: str = "PROPINDEX_",
                 environ: Optional[Mapping[str, str]] = None
                 ) -> "IndexConfig":
        """
        Build a config from environment variables.

        Reads <prefix>UNIVERSE as "x_min,y_min,x_max,y_max", <prefix>ROOT,
        and the booleans <prefix>USE_PREFILTER, <prefix>TRUNCATE_DISTANCE,
        <prefix>THREAD_SAFE.
        """
        environ = os.environ if environ is None else environ
        values: Dict[str, Any] = {}
        universe = environ.get(prefix + "UNIVERSE")
        if universe:
            values["universe"] = as_rect(universe.split(","))
        root = environ.get(prefix + "ROOT")
        if root:
            values["root"] = root.strip().lower()
        for name in ("use_prefilter", "truncate_distance", "thread_safe"):
            raw = environ.get(prefix + name.upper())
            if raw is not None:
                values[name] = raw.strip().lower() in _TRUE_STRINGS
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        values = dataclasses.asdict(self)
        values["universe"] = tuple(self.universe)
        return values
