"""Width-aware pretty printing of expression trees.

``prepare`` decides per list whether it fits on one line; ``write`` walks
the prepared tree and emits text, indentation and style changes to a sink.
"""

from typing import Optional

from .constants import EditorConstants
from .expr import (
    Atom, Expand, Expr, Inline, Label, ListExpr, Quotation, Styled, is_atom,
    with_style,
)
from .sink import Sink, StringSink


def inline_width(expr: Expr) -> int:
    """Width of ``expr`` when rendered on a single line."""
    if isinstance(expr, (Atom, Label)):
        return len(expr.text)
    if isinstance(expr, ListExpr):
        n_spaces = max(len(expr.children) - 1, 0)
        return 2 + sum(inline_width(x) for x in expr.children) + n_spaces
    if isinstance(expr, Styled):
        return inline_width(expr.inner)
    if isinstance(expr, Quotation):
        return 1 + inline_width(expr.inner)
    raise TypeError(f"Not an expression: {expr!r}")


class Pretty:
    """A prepared tree bound to the formatter that prepared it."""

    def __init__(self, formatter: 'PrettyFormatter', expr: Expr):
        self.formatter = formatter
        self.expr = expr

    def write(self, sink: Sink) -> None:
        self.formatter.write(self.expr, sink)

    def with_style(self, path, style) -> Optional['Pretty']:
        expr = with_style(self.expr, path, style)
        if expr is None:
            return None
        return Pretty(self.formatter, expr)

    def __str__(self) -> str:
        sink = StringSink()
        self.write(sink)
        return sink.getvalue()


class PrettyFormatter:
    """Lays out expressions within a maximum line width.

    Args:
        max_width: Widest inline rendering allowed for a list
        default_indent: Extra indentation of arguments after an atomic head
    """

    def __init__(self, max_width: int = EditorConstants.MAX_CODE_WIDTH,
                 default_indent: int = EditorConstants.DEFAULT_INDENT):
        self.max_width = max_width
        self.default_indent = default_indent

    def __repr__(self) -> str:
        return f"PrettyFormatter(max_width={self.max_width}, default_indent={self.default_indent})"

    def prepare(self, expr: Expr) -> Expr:
        """Return a display tree with oversized inline lists expanded.

        The input is not modified. Lists already tagged ``Expand`` are
        kept as they are, so preparing a prepared tree changes nothing.
        """
        if isinstance(expr, Inline):
            if inline_width(expr) <= self.max_width:
                return expr
            return Expand([self.prepare(x) for x in expr.children])
        if isinstance(expr, Styled):
            return Styled(expr.style, self.prepare(expr.inner))
        if isinstance(expr, Quotation):
            return Quotation(self.prepare(expr.inner))
        return expr

    def pretty(self, expr: Expr) -> Pretty:
        return Pretty(self, self.prepare(expr))

    def format(self, expr: Expr) -> str:
        """Prepare ``expr`` and render it as plain text."""
        return str(self.pretty(expr))

    def write(self, expr: Expr, sink: Sink, indent_level: int = 0) -> None:
        """Emit a prepared tree to ``sink``."""
        self._write(expr, indent_level, sink, False)

    def _write(self, expr: Expr, indent_level: int, sink: Sink, force_inline: bool) -> None:
        if isinstance(expr, (Atom, Label)):
            sink.write(expr.text)
        elif isinstance(expr, Inline) or (force_inline and isinstance(expr, ListExpr)):
            self._write_inline(expr.children, sink)
        elif isinstance(expr, Expand):
            self._write_expanded(expr.children, indent_level, sink)
        elif isinstance(expr, Styled):
            sink.save_style()
            sink.set_style(expr.style)
            self._write(expr.inner, indent_level, sink, force_inline)
            sink.restore_style()
        elif isinstance(expr, Quotation):
            sink.write("'")
            self._write(expr.inner, indent_level + 1, sink, force_inline)
        else:
            raise TypeError(f"Not an expression: {expr!r}")

    def _write_inline(self, xs: list, sink: Sink) -> None:
        sink.write("(")
        for i, x in enumerate(xs):
            if i:
                sink.write(" ")
            self._write(x, 0, sink, True)
        sink.write(")")

    def _write_expanded(self, xs: list, indent_level: int, sink: Sink) -> None:
        sink.write("(")
        if len(xs) == 1:
            self._write(xs[0], indent_level, sink, False)
        elif len(xs) > 1:
            # Operator forms indent their arguments; nested forms align one
            # column past the opening paren.
            if is_atom(xs[0]):
                indent_level += self.default_indent
            else:
                indent_level += 1
            self._write(xs[0], indent_level, sink, False)
            for x in xs[1:]:
                sink.write_indent(indent_level)
                self._write(x, indent_level, sink, False)
        sink.write(")")
