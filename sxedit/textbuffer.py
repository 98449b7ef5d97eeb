"""Character/style grid and the positional sink that paints into it."""

from typing import Any, Iterator, Optional

from .sink import StyleStackSink
from .styles import Style

DEFAULT_FRAME = ('╔', '═', '╗', '║', '║', '╚', '═', '╝')


class TextBuffer:
    """A width x height grid of characters, each with a style.

    Writes outside the grid are ignored.
    """

    def __init__(self, width: int, height: int, ch: str = ' ', style: Any = Style.DEFAULT):
        self.width = 0
        self.height = 0
        self._fill_char = ch
        self._fill_style = style
        self.resize(width, height)

    def resize(self, width: int, height: int) -> None:
        self.width = max(width, 0)
        self.height = max(height, 0)
        self._text = [[self._fill_char] * self.width for _ in range(self.height)]
        self._style = [[self._fill_style] * self.width for _ in range(self.height)]

    def clear(self, ch: str = ' ', style: Any = Style.DEFAULT) -> None:
        self._fill_char = ch
        self._fill_style = style
        self.fill_rect(0, 0, self.width, self.height, ch, style)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def set_char(self, x: int, y: int, ch: str, style: Any) -> None:
        if self.in_bounds(x, y):
            self._text[y][x] = ch
            self._style[y][x] = style

    def get_style(self, x: int, y: int) -> Any:
        return self._style[y][x]

    def fill_rect(self, x0: int, y0: int, x1: int, y1: int, ch: str, style: Any) -> None:
        """Fill the half-open rectangle [x0, x1) x [y0, y1)."""
        for y in range(max(y0, 0), min(y1, self.height)):
            for x in range(max(x0, 0), min(x1, self.width)):
                self._text[y][x] = ch
                self._style[y][x] = style

    def draw_hline(self, y: int, x0: int, x1: int, ch: str, style: Any) -> None:
        for x in range(x0, x1 + 1):
            self.set_char(x, y, ch, style)

    def draw_vline(self, x: int, y0: int, y1: int, ch: str, style: Any) -> None:
        for y in range(y0, y1 + 1):
            self.set_char(x, y, ch, style)

    def row_text(self, y: int) -> str:
        return ''.join(self._text[y])

    def lines(self) -> list[str]:
        return [self.row_text(y) for y in range(self.height)]

    def rows(self) -> Iterator[list[tuple[str, Any]]]:
        """Yield each row as a list of (char, style) cells."""
        for text_row, style_row in zip(self._text, self._style):
            yield list(zip(text_row, style_row))


class TextBufferSink(StyleStackSink):
    """Sink that paints into a TextBuffer starting at (x, y).

    A newline moves to the next row at the column where rendering began.
    When ``width``/``height`` are given, text outside that region is
    dropped.
    """

    def __init__(self, buffer: TextBuffer, x: int, y: int,
                 width: Optional[int] = None, height: Optional[int] = None,
                 style: Any = Style.DEFAULT):
        super().__init__(style)
        self.buffer = buffer
        self.start_column = x
        self.start_row = y
        self.column = x
        self.row = y
        self.width = width
        self.height = height

    def _visible(self, x: int, y: int) -> bool:
        if self.width is not None and not self.start_column <= x < self.start_column + self.width:
            return False
        if self.height is not None and not self.start_row <= y < self.start_row + self.height:
            return False
        return True

    def write(self, text: str) -> None:
        for ch in text:
            if ch == '\n':
                self.write_newline()
                continue
            if self._visible(self.column, self.row):
                self.buffer.set_char(self.column, self.row, ch, self.current_style)
            self.column += 1

    def write_newline(self) -> None:
        self.row += 1
        self.column = self.start_column


class Framed:
    """Draws a box around another drawable item."""

    def __init__(self, inner, tiles=DEFAULT_FRAME, style: Any = Style.FRAME):
        self.inner = inner
        self.tiles = tiles
        self.style = style

    def size(self) -> tuple[int, int]:
        w, h = self.inner.size()
        return (w + 2, h + 2)

    def draw(self, buf: TextBuffer, x: int, y: int) -> None:
        width, height = self.inner.size()
        t = self.tiles
        buf.set_char(x, y, t[0], self.style)
        buf.draw_hline(y, x + 1, x + width, t[1], self.style)
        buf.set_char(x + width + 1, y, t[2], self.style)
        buf.draw_vline(x, y + 1, y + height, t[3], self.style)
        buf.draw_vline(x + width + 1, y + 1, y + height, t[4], self.style)
        buf.set_char(x, y + height + 1, t[5], self.style)
        buf.draw_hline(y + height + 1, x + 1, x + width, t[6], self.style)
        buf.set_char(x + width + 1, y + height + 1, t[7], self.style)
        self.inner.draw(buf, x + 1, y + 1)
