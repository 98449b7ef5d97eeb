"""Expression tree model and path addressing.

A tree is built from a handful of node types:

- ``Atom``: editable leaf text, never empty
- ``Label``: fixed leaf text (keywords introduced at construction)
- ``Inline`` / ``Expand``: the two renderings of a list node
- ``Styled``: attaches a style tag to a node, invisible to paths
- ``Quotation``: a one-element wrapper marking quoted data

A path is a list of child indices from the root. ``Styled`` wrappers are
skipped transparently; a ``Quotation`` behaves like a list whose only
valid index is 0.
"""

from dataclasses import dataclass, field
from typing import Any, Optional, Union


class Expr:
    """Base class for expression nodes."""

    def __str__(self) -> str:
        from .layout import PrettyFormatter
        return PrettyFormatter().format(self)


@dataclass(eq=True)
class Atom(Expr):
    text: str


@dataclass(frozen=True)
class Label(Expr):
    text: str


@dataclass(eq=True)
class ListExpr(Expr):
    children: list = field(default_factory=list)


class Inline(ListExpr):
    """List rendered on a single line."""


class Expand(ListExpr):
    """List rendered with one child per line."""


@dataclass(eq=True)
class Styled(Expr):
    style: Any
    inner: Expr


@dataclass(eq=True)
class Quotation(Expr):
    inner: Expr


def build(value) -> Expr:
    """Build a tree from a Python literal.

    Lists and tuples become ``Inline`` lists, strings and numbers become
    atoms, and nodes are passed through unchanged.
    """
    if isinstance(value, Expr):
        return value
    if isinstance(value, (list, tuple)):
        return Inline([build(x) for x in value])
    if isinstance(value, bool):
        raise TypeError(f"Cannot build an expression from {value!r}")
    if isinstance(value, (int, float)):
        return Atom(str(value))
    if isinstance(value, str):
        if not value:
            return Inline([])
        return Atom(value)
    raise TypeError(f"Cannot build an expression from {value!r}")


def empty_list() -> Inline:
    return Inline([])


def unstyled(expr: Expr) -> Expr:
    """Strip any ``Styled`` wrappers around a node."""
    while isinstance(expr, Styled):
        expr = expr.inner
    return expr


def is_atom(expr: Expr) -> bool:
    return isinstance(unstyled(expr), (Atom, Label))


def is_empty_list(expr: Expr) -> bool:
    node = unstyled(expr)
    return isinstance(node, ListExpr) and not node.children


def is_quotation(expr: Expr) -> bool:
    return isinstance(unstyled(expr), Quotation)


def get_text(expr: Expr) -> Optional[str]:
    """Return the editable text of an atom, or None for anything else."""
    node = unstyled(expr)
    if isinstance(node, Atom):
        return node.text
    return None


def length(expr: Expr) -> int:
    """Number of addressable children of a node."""
    node = unstyled(expr)
    if isinstance(node, ListExpr):
        return len(node.children)
    if isinstance(node, Quotation):
        return 1
    return 0


def get(expr: Expr, path) -> Optional[Expr]:
    """Return the node addressed by ``path``, or None if it does not resolve."""
    node = unstyled(expr)
    for index in path:
        if isinstance(node, ListExpr):
            if not 0 <= index < len(node.children):
                return None
            node = unstyled(node.children[index])
        elif isinstance(node, Quotation):
            if index != 0:
                return None
            node = unstyled(node.inner)
        else:
            return None
    return node


class Slot:
    """A replaceable position in the tree.

    ``owner`` is either a list of children (``key`` is an index) or a
    wrapper/root object (``key`` is an attribute name).
    """

    __slots__ = ('owner', 'key')

    def __init__(self, owner, key: Union[int, str]):
        self.owner = owner
        self.key = key

    @property
    def node(self) -> Expr:
        if isinstance(self.owner, list):
            return self.owner[self.key]
        return getattr(self.owner, self.key)

    def replace(self, new: Expr) -> Expr:
        """Put ``new`` in this position and return the node it replaced."""
        old = self.node
        if isinstance(self.owner, list):
            self.owner[self.key] = new
        else:
            setattr(self.owner, self.key, new)
        return old


def _descend_styles(slot: Slot) -> Slot:
    node = slot.node
    while isinstance(node, Styled):
        slot = Slot(node, 'inner')
        node = node.inner
    return slot


def with_style(expr: Expr, path, style) -> Optional[Expr]:
    """Return a copy of ``expr`` with the node at ``path`` wrapped in ``style``.

    Only the nodes along the path are copied. Returns None when the path
    does not resolve.
    """
    if isinstance(expr, Styled):
        inner = with_style(expr.inner, path, style)
        return None if inner is None else Styled(expr.style, inner)
    if not path:
        return Styled(style, expr)
    index, rest = path[0], path[1:]
    if isinstance(expr, ListExpr):
        if not 0 <= index < len(expr.children):
            return None
        child = with_style(expr.children[index], rest, style)
        if child is None:
            return None
        children = list(expr.children)
        children[index] = child
        return type(expr)(children)
    if isinstance(expr, Quotation) and index == 0:
        inner = with_style(expr.inner, rest, style)
        return None if inner is None else Quotation(inner)
    return None


class Tree:
    """Owner of a mutable expression tree.

    All mutable access goes through ``get_mut``, which re-derives the slot
    from the root on every call.
    """

    def __init__(self, root: Expr):
        self.root = root

    def get(self, path) -> Optional[Expr]:
        return get(self.root, path)

    def get_mut(self, path) -> Optional[Slot]:
        """Return a slot holding the node that ``get(path)`` returns."""
        slot = _descend_styles(Slot(self, 'root'))
        for index in path:
            node = slot.node
            if isinstance(node, ListExpr):
                if not 0 <= index < len(node.children):
                    return None
                slot = Slot(node.children, index)
            elif isinstance(node, Quotation):
                if index != 0:
                    return None
                slot = Slot(node, 'inner')
            else:
                return None
            slot = _descend_styles(slot)
        return slot

    def length(self, path) -> int:
        node = self.get(path)
        return 0 if node is None else length(node)

    def is_valid_path(self, path) -> bool:
        return self.get(path) is not None

    def replace(self, path, new: Expr) -> bool:
        """Replace the node at ``path``. Returns False if the path is invalid."""
        slot = self.get_mut(path)
        if slot is None:
            return False
        slot.replace(new)
        return True

    def __repr__(self) -> str:
        return f"Tree({self.root!r})"

    def __str__(self) -> str:
        return str(self.root)
