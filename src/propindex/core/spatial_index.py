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
Spatial index tree data structure and algorithms.

The tree is made of two kinds of nodes, :class:`LeafNode` and
:class:`InternalNode`. The algorithms operating on it are separated from the
data structure as visitors.
'''
from propindex.core.enclosing_geometry import bound_all


# ====================  Tree Data Structure  =============================

# Tree structure: a node is either a leaf or an internal node, never both.
#   1. A leaf node holds a list of properties, in insertion order.
#   1. An internal node holds a list of children nodes, in insertion order.
#   1. Each node has bounds enclosing all shapes below it. Bounds are seeded
#      by the node's initial bounds and never shrink.
# Implements visitor pattern: a visitor has visit_leaf and visit_internal
# methods.


class LeafNode():
    """
    Node holding properties.

    Attributes
    ----------
    bounds: Rect
        Encloses the boxes of all `items`.
    items: list of Property
    """
    __slots__ = ('bounds', 'items')

    def __init__(self, bounds, items=None):
        self.bounds = bounds
        self.items = [] if items is None else list(items)

    def __repr__(self):
        return "<LeafNode bounds={!r} items={}>".format(
            self.bounds, len(self.items))

    @property
    def isleaf(self):
        return True

    def contents(self):
        '''Boxes of the node's direct contents.'''
        return [p.box for p in self.items]

    def accept(self, visitor, *args, **kwargs):
        '''Accept `visitor` to operate on the structure.'''
        return visitor.visit_leaf(self, *args, **kwargs)


class InternalNode():
    """
    Node holding children nodes.

    Attributes
    ----------
    bounds: Rect
        Encloses the bounds of all `children`.
    children: list of LeafNode or InternalNode
    """
    __slots__ = ('bounds', 'children')

    def __init__(self, bounds, children=None):
        self.bounds = bounds
        self.children = [] if children is None else list(children)

    def __repr__(self):
        return "<InternalNode bounds={!r} children={}>".format(
            self.bounds, len(self.children))

    @property
    def isleaf(self):
        return False

    def contents(self):
        '''Bounds of the node's direct children.'''
        return [c.bounds for c in self.children]

    def accept(self, visitor, *args, **kwargs):
        '''Accept `visitor` to operate on the structure.'''
        return visitor.visit_internal(self, *args, **kwargs)


def update_bounds(node):
    '''Recompute `node.bounds` from its current bounds and contents.'''
    node.bounds = bound_all([node.bounds] + node.contents())
    return node.bounds


def walk(node):
    '''Depth-first iteration over `node` and all nodes below it.'''
    yield node
    if not node.isleaf:
        for child in node.children:
            yield from walk(child)


def depth(node):
    if node.isleaf:
        return 1
    return 1 + max((depth(c) for c in node.children), default=0)


# ====================  Visitors  =============================


class Insert():
    '''
    Insertion visitor.

    A leaf appends the property to its items. An internal node wraps the
    property in a new single-item leaf child. No splitting, no balancing:
    the tree keeps a single level below the visited node.
    '''
    @staticmethod
    def visit_leaf(node, prop):
        node.items.append(prop)
        update_bounds(node)

    @staticmethod
    def visit_internal(node, prop):
        node.children.append(LeafNode(prop.box, [prop]))
        update_bounds(node)


class Intersection():
    """
    Range query visitor.

    Generates the properties whose box intersects `region`, depth-first and
    in insertion order. Subtrees whose bounds miss `region` are pruned.
    """
    def visit_leaf(self, node, region):
        if not node.bounds.intersects(region):
            return
        yield from (p for p in node.items if region.intersects(p.box))

    def visit_internal(self, node, region):
        if not node.bounds.intersects(region):
            return
        for child in node.children:
            yield from child.accept(self, region)


class Collect():
    '''All properties below a node, in insertion order.'''
    def visit_leaf(self, node):
        yield from node.items

    def visit_internal(self, node):
        for child in node.children:
            yield from child.accept(self)
