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
Interactive real estate menu on top of :class:`PropertyIndex`.

The menu only reads and validates scalars, re-prompting until they are
well-formed, and renders query results one line per listing.
"""
import argparse
import logging
import math
import sys

import propindex
from propindex.config import IndexConfig, ROOT_KINDS
from propindex.core.enclosing_geometry import as_rect
from propindex.core.records import check_count, check_non_negative
from propindex.index import PropertyIndex
from propindex.pandas import read_csv

logger = logging.getLogger(__name__)

MENU = ("\nReal Estate Property System\n"
        "1. Insert Property\n2. Query Properties\n"
        "3. Query Near Location\n4. Exit\n")
RECT_FORMAT = "(x_min y_min x_max y_max)"
BAD_RECT = ("Invalid input. Ensure x_min <= x_max and y_min <= y_max. "
            "Enter {} " + RECT_FORMAT + ": ")


def format_property(prop):
    return ("Location: {}, Price: ${:g}, Area: {:g} sq. ft., Bedrooms: {}, "
            "Bounding Box: ({:g}, {:g}, {:g}, {:g})"
            .format(prop.location, prop.price, prop.area, prop.bedrooms,
                    *prop.box))


def _amount(name):
    return lambda text: check_non_negative(name, float(text))


def _count(name):
    return lambda text: check_count(name, int(text))


def _rect(text):
    return as_rect(text.split()).validate()


def _point(text):
    x, y = (float(v) for v in text.split())
    if not (math.isfinite(x) and math.isfinite(y)):
        raise ValueError("location must be finite")
    return x, y


class Menu():
    """
    Line oriented prompt loop.

    Attributes
    ----------
    index: PropertyIndex
    stdin, stdout: text streams
    """
    def __init__(self, index, stdin=None, stdout=None):
        self.index = index
        self.stdin = sys.stdin if stdin is None else stdin
        self.stdout = sys.stdout if stdout is None else stdout

    def write(self, text):
        self.stdout.write(text)
        self.stdout.flush()

    def readline(self):
        line = self.stdin.readline()
        if not line:
            raise EOFError
        return line.rstrip("\n")

    def ask(self, prompt, convert, retry):
        """Prompt until `convert` accepts the answer."""
        self.write(prompt)
        while True:
            text = self.readline()
            try:
                return convert(text)
            except ValueError:
                self.write(retry)

    def show(self, results, empty_message):
        self.write("Query results:\n")
        if not results:
            self.write(empty_message + "\n")
        for prop in results:
            self.write(format_property(prop) + "\n")

    def insert(self):
        location = self.ask("Enter property location: ", str, "")
        price = self.ask(
            "Enter property price: ", _amount('price'),
            "Invalid input. Please enter a positive number for price: ")
        area = self.ask(
            "Enter property area: ", _amount('area'),
            "Invalid input. Please enter a positive number for area: ")
        bedrooms = self.ask(
            "Enter number of bedrooms: ", _count('bedrooms'),
            "Invalid input. Please enter a non-negative integer for "
            "bedrooms: ")
        box = self.ask(
            "Enter property bounding box " + RECT_FORMAT + ": ", _rect,
            BAD_RECT.format("bounding box"))
        self.index.insert(location, price, area, bedrooms, box)
        self.write("Property inserted.\n")

    def range_query(self):
        region = self.ask("Enter query range " + RECT_FORMAT + ": ", _rect,
                          BAD_RECT.format("query range"))
        self.show(self.index.range_query(region),
                  "No properties found within the specified range.")

    def near_location_query(self):
        x, y = self.ask("Enter your location (x y): ", _point,
                        "Invalid input. Enter your location (x y): ")
        radius = self.ask(
            "Enter search distance (km): ", _amount('radius'),
            "Invalid input. Please enter a non-negative number for "
            "distance: ")
        max_price = self.ask(
            "Enter maximum price: ", _amount('max_price'),
            "Invalid input. Please enter a non-negative number for price: ")
        min_area = self.ask(
            "Enter minimum area: ", _amount('min_area'),
            "Invalid input. Please enter a non-negative number for area: ")
        min_bedrooms = self.ask(
            "Enter minimum number of bedrooms: ", _count('min_bedrooms'),
            "Invalid input. Please enter a non-negative integer for "
            "bedrooms: ")
        results = self.index.near_location_query(
            x, y, radius, max_price, min_area, min_bedrooms)
        self.show(results,
                  "No properties found within the specified criteria.")

    def run(self):
        """Loop on the menu until exit or end of input."""
        actions = {1: self.insert, 2: self.range_query,
                   3: self.near_location_query}
        while True:
            self.write(MENU)
            self.write("Enter your choice: ")
            try:
                text = self.readline()
            except EOFError:
                break
            try:
                choice = int(text)
            except ValueError:
                choice = None
            if choice == 4:
                break
            if choice not in actions:
                self.write("Invalid choice. Please try again.\n")
                continue
            try:
                actions[choice]()
            except EOFError:
                break
        self.write("Exiting...\n")
        return 0


def build_parser():
    parser = argparse.ArgumentParser(
        prog="propindex",
        description="Interactive spatial index of property listings.",
    )
    parser.add_argument("--version", action="version",
                        version="%(prog)s " + propindex.__version__)
    parser.add_argument("--universe", nargs=4, type=float,
                        metavar=("XMIN", "YMIN", "XMAX", "YMAX"),
                        help="initial bounds of the index")
    parser.add_argument("--root", choices=ROOT_KINDS,
                        help="kind of root node (default: leaf)")
    parser.add_argument("--truncate-distance", action="store_true",
                        help="compare integral distances, as older indexes "
                             "did")
    parser.add_argument("--no-prefilter", action="store_true",
                        help="scan all listings in near location queries")
    parser.add_argument("--load", metavar="CSV",
                        help="bulk load listings from a CSV file first")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="debug logging")
    return parser


def make_config(args, environ=None):
    """Environment config overridden by the command line options."""
    config = IndexConfig.from_env(environ=environ).to_dict()
    if args.universe is not None:
        config["universe"] = tuple(args.universe)
    if args.root is not None:
        config["root"] = args.root
    if args.truncate_distance:
        config["truncate_distance"] = True
    if args.no_prefilter:
        config["use_prefilter"] = False
    return IndexConfig.from_dict(config)


def main(argv=None, stdin=None, stdout=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    try:
        config = make_config(args)
    except ValueError as exc:
        logger.error(f"Invalid configuration: {exc}")
        return 2
    index = PropertyIndex(config)
    if args.load:
        try:
            read_csv(args.load, index=index)
        except (OSError, ValueError) as exc:
            logger.error(f"Cannot load {args.load}: {exc}")
            return 1
        logger.info(f"Loaded {len(index)} properties from {args.load}")
    return Menu(index, stdin=stdin, stdout=stdout).run()


if __name__ == "__main__":
    sys.exit(main())
