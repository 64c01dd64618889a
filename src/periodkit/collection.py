"""Period collections.

:class:`PeriodCollection` stores concrete periods with a unique key and an
arbitrary payload, and answers "which stored periods overlap this one?"
quickly. It is an interval tree: a red-black tree keyed on period start
where every node also records the latest end found in its subtree, so whole
subtrees that end before a query can be skipped.

Insertion and deletion are logarithmic. A query visits only subtrees that
can contain a match, so it stays well below linear time as long as the query
is short relative to the span of stored periods.
"""

from __future__ import annotations

import threading
from collections.abc import Hashable, Iterator
from dataclasses import dataclass
from typing import Any

from periodkit.exceptions import DuplicateKeyError, KeyNotFoundError
from periodkit.period import Period
from periodkit.time_utils import MAX_INSTANT, MIN_INSTANT, InstantInput, as_utc

_RED = True
_BLACK = False


class _Node:
    """Interval tree node.

    ``start_key``/``end_key`` are the period edges in UTC with unbounded
    edges mapped to the min/max sentinels. ``max_end`` is the greatest
    ``end_key`` in the subtree rooted at this node.
    """

    __slots__ = ("color", "contents", "end_key", "key", "left", "max_end", "parent", "period", "right", "start_key")

    def __init__(self, period: Period | None, key: Hashable, contents: Any, nil: _Node | None) -> None:
        self.period = period
        self.key = key
        self.contents = contents
        if period is None:
            self.start_key = MIN_INSTANT
            self.end_key = MIN_INSTANT
        else:
            self.start_key = MIN_INSTANT if period.start is None else as_utc(period.start)
            self.end_key = MAX_INSTANT if period.end is None else as_utc(period.end)
        self.max_end = self.end_key
        self.color = _BLACK
        # The sentinel points at itself until it is attached somewhere.
        self.left: _Node = nil if nil is not None else self
        self.right: _Node = nil if nil is not None else self
        self.parent: _Node = nil if nil is not None else self


@dataclass(frozen=True, slots=True)
class CollectionItem:
    """A stored entry as returned by :meth:`PeriodCollection.items`."""

    key: Hashable
    period: Period
    contents: Any


class PeriodCollection:
    """A thread-safe store of keyed periods supporting overlap queries.

    Examples:
        >>> collection = PeriodCollection()
        >>> collection.insert(Period(start, end), "reservation-1", reservation)
        >>> collection.intersecting(Period(query_start, query_end))
        [reservation]
    """

    __slots__ = ("_lock", "_nil", "_nodes", "_root")

    def __init__(self) -> None:
        self._nil = _Node(None, None, None, None)
        self._root = self._nil
        # The tree is keyed on period start, so keys are looked up here.
        self._nodes: dict[Hashable, _Node] = {}
        self._lock = threading.RLock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._nodes)

    def __contains__(self, key: object) -> bool:
        return self.contains_key(key)  # type: ignore[arg-type]

    def __iter__(self) -> Iterator[CollectionItem]:
        return iter(self.items())

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def insert(self, period: Period, key: Hashable, contents: Any = None) -> None:
        """Add a period under a unique key.

        Args:
            period: The period to store.
            key: Unique identifier used for later updates and deletions.
            contents: Arbitrary payload returned by :meth:`intersecting`.

        Raises:
            DuplicateKeyError: If a period with ``key`` is already stored.
        """
        with self._lock:
            if key in self._nodes:
                raise DuplicateKeyError(key)
            node = _Node(period, key, contents, self._nil)
            self._insert_node(node)
            self._nodes[key] = node

    def delete(self, key: Hashable) -> None:
        """Remove the period stored under ``key``.

        Raises:
            KeyNotFoundError: If no period is stored under ``key``.
        """
        with self._lock:
            node = self._nodes.get(key)
            if node is None:
                raise KeyNotFoundError(key, "delete")
            self._delete_node(node)
            del self._nodes[key]

    def update(self, key: Hashable, period: Period, contents: Any = None) -> None:
        """Replace the period and contents stored under ``key``.

        When the period is unchanged only the contents are swapped; otherwise
        the entry is moved to its new place in the tree.

        Raises:
            KeyNotFoundError: If no period is stored under ``key``.
        """
        with self._lock:
            node = self._nodes.get(key)
            if node is None:
                raise KeyNotFoundError(key, "update")
            if node.period is not None and node.period.equals(period):
                node.contents = contents
                return
            self._delete_node(node)
            replacement = _Node(period, key, contents, self._nil)
            self._insert_node(replacement)
            self._nodes[key] = replacement

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def contains_key(self, key: Hashable) -> bool:
        """Return True if a period is stored under ``key``."""
        with self._lock:
            return key in self._nodes

    def get(self, key: Hashable) -> CollectionItem | None:
        """Return the entry stored under ``key``, or None."""
        with self._lock:
            node = self._nodes.get(key)
            if node is None or node.period is None:
                return None
            return CollectionItem(node.key, node.period, node.contents)

    def contains_time(self, t: InstantInput) -> bool:
        """Return True if any stored period contains the instant."""
        instant = as_utc(t)
        with self._lock:
            node = self._root
            while node is not self._nil:
                if node.start_key <= instant < node.end_key:
                    return True
                # If anything on the left ends after the instant but does not
                # contain it, it starts after the instant, and so does
                # everything on the right.
                if node.left is not self._nil and node.left.max_end > instant:
                    node = node.left
                else:
                    node = node.right
            return False

    def intersecting(self, query: Period) -> list[Any]:
        """Return the contents of every stored period intersecting ``query``.

        Intersection is inclusive on the start and exclusive on the end.
        Results are ordered by period start.
        """
        lo, hi = _query_bounds(query)
        results: list[Any] = []
        with self._lock:
            for node in self._search(self._root, lo, hi):
                results.append(node.contents)
        return results

    def any_intersecting(self, query: Period) -> bool:
        """Return True if any stored period intersects ``query``.

        Stops at the first match, so it is cheaper than :meth:`intersecting`.
        """
        lo, hi = _query_bounds(query)
        with self._lock:
            return next(self._search(self._root, lo, hi), None) is not None

    def items(self) -> list[CollectionItem]:
        """Return all entries ordered by period start."""
        with self._lock:
            return [
                CollectionItem(node.key, node.period, node.contents)  # type: ignore[arg-type]
                for node in self._in_order(self._root)
            ]

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def _in_order(self, node: _Node) -> Iterator[_Node]:
        stack: list[_Node] = []
        while stack or node is not self._nil:
            while node is not self._nil:
                stack.append(node)
                node = node.left
            node = stack.pop()
            yield node
            node = node.right

    def _search(self, node: _Node, lo: Any, hi: Any) -> Iterator[_Node]:
        """Yield nodes intersecting ``[lo, hi)`` in start order."""
        if node is self._nil or node.max_end <= lo:
            return
        yield from self._search(node.left, lo, hi)
        if max(node.start_key, lo) < min(node.end_key, hi):
            yield node
        # Everything on the right starts at or after this node.
        if node.start_key < hi:
            yield from self._search(node.right, lo, hi)

    # ------------------------------------------------------------------
    # Red-black maintenance
    # ------------------------------------------------------------------

    def _refresh_max(self, node: _Node) -> None:
        node.max_end = max(node.end_key, node.left.max_end, node.right.max_end)

    def _refresh_max_upwards(self, node: _Node) -> None:
        while node is not self._nil:
            self._refresh_max(node)
            node = node.parent

    def _rotate_left(self, x: _Node) -> None:
        y = x.right
        x.right = y.left
        if y.left is not self._nil:
            y.left.parent = x
        y.parent = x.parent
        if x.parent is self._nil:
            self._root = y
        elif x is x.parent.left:
            x.parent.left = y
        else:
            x.parent.right = y
        y.left = x
        x.parent = y
        self._refresh_max(x)
        self._refresh_max(y)

    def _rotate_right(self, x: _Node) -> None:
        y = x.left
        x.left = y.right
        if y.right is not self._nil:
            y.right.parent = x
        y.parent = x.parent
        if x.parent is self._nil:
            self._root = y
        elif x is x.parent.right:
            x.parent.right = y
        else:
            x.parent.left = y
        y.right = x
        x.parent = y
        self._refresh_max(x)
        self._refresh_max(y)

    def _insert_node(self, z: _Node) -> None:
        parent = self._nil
        node = self._root
        while node is not self._nil:
            parent = node
            node = node.left if z.start_key < node.start_key else node.right
        z.parent = parent
        if parent is self._nil:
            self._root = z
        elif z.start_key < parent.start_key:
            parent.left = z
        else:
            parent.right = z
        z.left = z.right = self._nil
        z.color = _RED
        self._refresh_max_upwards(z)
        self._insert_fixup(z)

    def _insert_fixup(self, z: _Node) -> None:
        while z.parent.color is _RED:
            grandparent = z.parent.parent
            if z.parent is grandparent.left:
                uncle = grandparent.right
                if uncle.color is _RED:
                    z.parent.color = _BLACK
                    uncle.color = _BLACK
                    grandparent.color = _RED
                    z = grandparent
                else:
                    if z is z.parent.right:
                        z = z.parent
                        self._rotate_left(z)
                    z.parent.color = _BLACK
                    z.parent.parent.color = _RED
                    self._rotate_right(z.parent.parent)
            else:
                uncle = grandparent.left
                if uncle.color is _RED:
                    z.parent.color = _BLACK
                    uncle.color = _BLACK
                    grandparent.color = _RED
                    z = grandparent
                else:
                    if z is z.parent.left:
                        z = z.parent
                        self._rotate_right(z)
                    z.parent.color = _BLACK
                    z.parent.parent.color = _RED
                    self._rotate_left(z.parent.parent)
        self._root.color = _BLACK

    def _transplant(self, u: _Node, v: _Node) -> None:
        if u.parent is self._nil:
            self._root = v
        elif u is u.parent.left:
            u.parent.left = v
        else:
            u.parent.right = v
        v.parent = u.parent

    def _minimum(self, node: _Node) -> _Node:
        while node.left is not self._nil:
            node = node.left
        return node

    def _delete_node(self, z: _Node) -> None:
        y = z
        y_original_color = y.color
        if z.left is self._nil:
            x = z.right
            self._transplant(z, z.right)
        elif z.right is self._nil:
            x = z.left
            self._transplant(z, z.left)
        else:
            # z has two children: its in-order successor takes its place.
            y = self._minimum(z.right)
            y_original_color = y.color
            x = y.right
            if y.parent is z:
                x.parent = y
            else:
                self._transplant(y, y.right)
                y.right = z.right
                y.right.parent = y
            self._transplant(z, y)
            y.left = z.left
            y.left.parent = y
            y.color = z.color
        self._refresh_max_upwards(x.parent)
        if y_original_color is _BLACK:
            self._delete_fixup(x)
        # Detach the sentinel again; fixup may have used its parent pointer.
        self._nil.parent = self._nil
        z.left = z.right = z.parent = self._nil

    def _delete_fixup(self, x: _Node) -> None:
        while x is not self._root and x.color is _BLACK:
            if x is x.parent.left:
                sibling = x.parent.right
                if sibling.color is _RED:
                    sibling.color = _BLACK
                    x.parent.color = _RED
                    self._rotate_left(x.parent)
                    sibling = x.parent.right
                if sibling.left.color is _BLACK and sibling.right.color is _BLACK:
                    sibling.color = _RED
                    x = x.parent
                else:
                    if sibling.right.color is _BLACK:
                        sibling.left.color = _BLACK
                        sibling.color = _RED
                        self._rotate_right(sibling)
                        sibling = x.parent.right
                    sibling.color = x.parent.color
                    x.parent.color = _BLACK
                    sibling.right.color = _BLACK
                    self._rotate_left(x.parent)
                    x = self._root
            else:
                sibling = x.parent.left
                if sibling.color is _RED:
                    sibling.color = _BLACK
                    x.parent.color = _RED
                    self._rotate_right(x.parent)
                    sibling = x.parent.left
                if sibling.right.color is _BLACK and sibling.left.color is _BLACK:
                    sibling.color = _RED
                    x = x.parent
                else:
                    if sibling.left.color is _BLACK:
                        sibling.right.color = _BLACK
                        sibling.color = _RED
                        self._rotate_left(sibling)
                        sibling = x.parent.left
                    sibling.color = x.parent.color
                    x.parent.color = _BLACK
                    sibling.left.color = _BLACK
                    self._rotate_right(x.parent)
                    x = self._root
        x.color = _BLACK


def _query_bounds(query: Period) -> tuple[Any, Any]:
    lo = MIN_INSTANT if query.start is None else as_utc(query.start)
    hi = MAX_INSTANT if query.end is None else as_utc(query.end)
    return lo, hi
