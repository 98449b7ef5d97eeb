"""sxedit - A structural editor for nested-list expressions."""

from .expr import Atom, Label, Inline, Expand, Styled, Quotation, Tree, build, get, with_style
from .layout import PrettyFormatter, inline_width
from .sink import Sink, StringSink
from .view import SexprView

__all__ = [
    'Atom',
    'Label',
    'Inline',
    'Expand',
    'Styled',
    'Quotation',
    'Tree',
    'build',
    'get',
    'with_style',
    'PrettyFormatter',
    'inline_width',
    'Sink',
    'StringSink',
    'SexprView',
]
