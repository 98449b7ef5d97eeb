"""Structural cursor over an expression tree."""

import logging
from typing import Optional

from .constants import EditorConstants
from .expr import (
    Atom, Expr, Inline, ListExpr, Quotation, Tree, empty_list, get_text,
    is_empty_list, is_quotation,
)
from .layout import PrettyFormatter
from .styles import Style
from .textbuffer import TextBuffer, TextBufferSink

logger = logging.getLogger(__name__)


class SexprView:
    """Owns a tree, a viewport size and a cursor path into the tree.

    The cursor is always a path; the empty path selects the root. Every
    operation leaves the cursor on an existing node, or changes nothing.
    """

    def __init__(self, expr: Expr, width: int = EditorConstants.VIEW_WIDTH,
                 height: int = EditorConstants.VIEW_HEIGHT,
                 default_indent: int = EditorConstants.DEFAULT_INDENT,
                 cursor: Optional[list[int]] = None):
        self.tree = expr if isinstance(expr, Tree) else Tree(expr)
        self.width = width
        self.height = height
        self.default_indent = default_indent
        self.cursor: list[int] = []
        if cursor and self.tree.is_valid_path(cursor):
            self.cursor = list(cursor)

    @property
    def expr(self) -> Expr:
        return self.tree.root

    @property
    def selected(self) -> Optional[Expr]:
        """The node under the cursor."""
        return self.tree.get(self.cursor)

    # --- Navigation ---

    def move_out(self) -> None:
        if self.cursor:
            self.cursor.pop()

    def move_into(self) -> None:
        self.cursor.append(0)
        if not self.tree.is_valid_path(self.cursor):
            self.cursor.pop()

    def move_sibling(self, direction: int) -> None:
        """Select the sibling ``direction`` steps away, wrapping around."""
        if not self.cursor:
            return
        n = self.tree.length(self.cursor[:-1])
        if n == 0:
            return
        self.cursor[-1] = (self.cursor[-1] + direction) % n

    # --- Editing ---

    def append_char(self, postfix: str) -> None:
        """Append text to the selected atom, or start text in an empty list."""
        slot = self.tree.get_mut(self.cursor)
        node = slot.node
        text = get_text(node)
        if text is not None:
            node.text = text + postfix
        elif is_empty_list(node) and postfix:
            node.children.append(Atom(postfix))
            self.move_into()
        else:
            logger.debug("append at %s ignored: not text or empty list", self.cursor)

    def delete_char(self) -> None:
        """Drop the last character of the selected atom.

        An atom that would become empty turns into an empty list.
        """
        slot = self.tree.get_mut(self.cursor)
        text = get_text(slot.node)
        if text is None:
            return
        text = text[:-1]
        if text:
            slot.node.text = text
        else:
            slot.replace(empty_list())

    def delete_element(self) -> None:
        """Remove the selected node from its parent list."""
        if not self.cursor:
            return
        parent_path, index = self.cursor[:-1], self.cursor[-1]
        parent = self.tree.get(parent_path)
        if not isinstance(parent, ListExpr):
            # The only child of a quotation is not removable on its own
            logger.debug("delete at %s ignored: parent is not a list", self.cursor)
            return
        del parent.children[index]
        if not parent.children:
            self.cursor.pop()
        else:
            self.cursor[-1] = min(index, len(parent.children) - 1)

    def insert_after(self) -> None:
        """Insert an empty list after the selection and select it.

        Quotations are not split: inside one, the insertion happens after
        the outermost enclosing quotation instead.
        """
        path = list(self.cursor)
        while path:
            parent = self.tree.get(path[:-1])
            if is_quotation(parent):
                path.pop()
                continue
            parent.children.insert(path[-1] + 1, empty_list())
            path[-1] += 1
            self.cursor = path
            return
        logger.debug("insert after %s ignored: no enclosing list", self.cursor)

    def quote(self) -> None:
        slot = self.tree.get_mut(self.cursor)
        slot.replace(Quotation(slot.node))

    def wrap_in_list(self) -> None:
        """Wrap the selection in a new list and select the original node."""
        slot = self.tree.get_mut(self.cursor)
        slot.replace(Inline([slot.node]))
        self.cursor.append(0)

    def unwrap_singleton(self) -> None:
        """Replace a one-element list or a quotation by its content."""
        slot = self.tree.get_mut(self.cursor)
        node = slot.node
        if isinstance(node, ListExpr) and len(node.children) == 1:
            slot.replace(node.children[0])
        elif isinstance(node, Quotation):
            slot.replace(node.inner)

    # --- Display ---

    def size(self) -> tuple[int, int]:
        return (self.width, self.height)

    def resize(self, width: int, height: int) -> None:
        self.width = width
        self.height = height

    def formatter(self) -> PrettyFormatter:
        return PrettyFormatter(max_width=self.width, default_indent=self.default_indent)

    def draw(self, buf: TextBuffer, x: int, y: int) -> None:
        """Render the tree into ``buf`` with the selection highlighted."""
        buf.fill_rect(x, y, x + self.width, y + self.height, ' ', Style.DEFAULT)
        pretty = self.formatter().pretty(self.expr)
        pretty = pretty.with_style([], Style.DEFAULT).with_style(self.cursor, Style.HIGHLIGHT)
        sink = TextBufferSink(buf, x, y, width=self.width, height=self.height)
        pretty.write(sink)

    def __str__(self) -> str:
        return self.formatter().format(self.expr)

