from __future__ import annotations

import threading
from typing import Any, Callable, Generic, Iterable, Optional, Tuple, TypeVar


T = TypeVar("T")

ChildThunk = Callable[[], Iterable["LazyTree[T]"]]

_UNSET: Any = object()


class _Once(Generic[T]):
    """Single-initialization cell: `get()` runs the thunk on first call only."""

    __slots__ = ("_thunk", "_value", "_lock")

    def __init__(self, thunk: Callable[[], T]) -> None:
        self._thunk = thunk
        self._value: Any = _UNSET
        self._lock = threading.Lock()

    def get(self) -> T:
        value = self._value
        if value is not _UNSET:
            return value
        with self._lock:
            if self._value is _UNSET:
                self._value = self._thunk()
            return self._value

    @classmethod
    def ready(cls, value: T) -> "_Once[T]":
        cell: _Once[T] = cls(lambda: value)
        cell._value = value
        return cell

    @property
    def forced(self) -> bool:
        return self._value is not _UNSET


class LazyTree(Generic[T]):
    """A node with a payload and an on-demand, memoized sequence of children.

    Nothing is computed at construction. The first `children()` call runs the
    child thunk and caches the result as a tuple; later calls return the cache.
    A node built with `deferred()` also postpones its payload.
    """

    __slots__ = ("_payload", "_children")

    def __init__(self, value: T, children: Optional[ChildThunk] = None) -> None:
        self._payload: _Once[T] = _Once.ready(value)
        self._children: Optional[_Once[Tuple[LazyTree[T], ...]]] = None
        self._init_children(children)

    def _init_children(self, children: Optional[ChildThunk]) -> None:
        if children is None:
            self._children = None
        else:
            self._children = _Once(lambda: tuple(children()))

    @classmethod
    def deferred(
        cls, value_fn: Callable[[], T], children: Optional[ChildThunk] = None
    ) -> "LazyTree[T]":
        node: LazyTree[T] = cls.__new__(cls)
        node._payload = _Once(value_fn)
        node._init_children(children)
        return node

    @classmethod
    def leaf(cls, value: T) -> "LazyTree[T]":
        return cls(value)

    def payload(self) -> T:
        return self._payload.get()

    def children(self) -> Tuple["LazyTree[T]", ...]:
        if self._children is None:
            return ()
        return self._children.get()

    def is_leaf(self) -> bool:
        return not self.children()

    @property
    def expanded(self) -> bool:
        """True once the children of this node have been materialized."""
        return self._children is None or self._children.forced

    def __repr__(self) -> str:
        state = "expanded" if self.expanded else "lazy"
        # Never force a deferred payload here
        value = repr(self._payload.get()) if self._payload.forced else "<deferred>"
        return f"LazyTree({value}, {state})"


def from_nested(spec: Any) -> LazyTree[Any]:
    """Build a finite tree from `(value, [child_spec, ...])` tuples.

    Any spec that is not a 2-tuple with a list/tuple second item is a leaf value.
    """
    if isinstance(spec, tuple) and len(spec) == 2 and isinstance(spec[1], (list, tuple)):
        value, subs = spec
        if not subs:
            return LazyTree.leaf(value)
        return LazyTree(value, lambda: [from_nested(s) for s in subs])
    return LazyTree.leaf(spec)


def to_nested(tree: LazyTree[T]) -> Any:
    """Force a finite tree into `(value, [children...])` form; leaves become `(value, [])`.

    Never call this on an unpruned tree from `generate_tree`.
    """
    return (tree.payload(), [to_nested(c) for c in tree.children()])
