"""Test the structural cursor and its editing operations."""

import pytest
from sxedit.expr import Atom, Label, Inline, Quotation, Styled, build
from sxedit.styles import Style
from sxedit.textbuffer import TextBuffer
from sxedit.view import SexprView


def make_view(value, cursor=None, width=25, height=10):
    return SexprView(build(value), width=width, height=height, cursor=cursor)


def sample_view(cursor=None):
    return make_view([["x"], ["a", "b", "c"], ["y"]], cursor=cursor)


def test_cursor_starts_at_root():
    """A new view selects the root."""
    view = sample_view()
    assert view.cursor == []
    assert view.selected is view.expr


def test_invalid_initial_cursor_falls_back_to_root():
    """A cursor that does not resolve is replaced by the root."""
    view = sample_view(cursor=[9, 9])
    assert view.cursor == []


def test_selected_is_none_for_missing_node():
    """A cursor assigned past the tree selects nothing."""
    view = sample_view()
    view.cursor = [5, 0]
    assert view.selected is None


# --- Navigation ---

def test_move_into_selects_first_child():
    """Moving in selects the first child."""
    view = sample_view()
    view.move_into()
    assert view.cursor == [0]
    view.move_into()
    assert view.cursor == [0, 0]


def test_move_into_atom_is_noop():
    """Atoms cannot be entered."""
    view = sample_view(cursor=[1, 0])
    view.move_into()
    assert view.cursor == [1, 0]


def test_move_into_empty_list_is_noop():
    """Empty lists cannot be entered."""
    view = make_view([[], "a"], cursor=[0])
    view.move_into()
    assert view.cursor == [0]


def test_move_out_pops_one_level():
    """Moving out selects the parent."""
    view = sample_view(cursor=[1, 2])
    view.move_out()
    assert view.cursor == [1]


def test_move_out_at_root_stays_at_root():
    """Moving out of the root does nothing."""
    view = sample_view()
    view.move_out()
    assert view.cursor == []


def test_sibling_wraps_forward():
    """Cursor [1, 2] in ((x) (a b c) (y)) moves to [1, 0]."""
    view = sample_view(cursor=[1, 2])
    view.move_sibling(1)
    assert view.cursor == [1, 0]


def test_sibling_wraps_backward():
    """Moving back from the first child selects the last."""
    view = sample_view(cursor=[1, 0])
    view.move_sibling(-1)
    assert view.cursor == [1, 2]


def test_sibling_cycle_returns_to_start():
    """Moving once per sibling returns to the start."""
    view = sample_view(cursor=[1, 1])
    for _ in range(3):
        view.move_sibling(1)
    assert view.cursor == [1, 1]


def test_sibling_at_root_is_noop():
    """The root has no siblings."""
    view = sample_view()
    view.move_sibling(1)
    assert view.cursor == []


def test_navigation_through_styles():
    """Navigation ignores style wrappers."""
    view = SexprView(Styled(Style.DEFAULT, build([Styled(Style.FRAME, build(["a", "b"]))])))
    view.move_into()
    view.move_into()
    view.move_sibling(1)
    assert view.cursor == [0, 1]
    assert view.selected == Atom("b")


# --- Text editing ---

def test_append_char_to_atom():
    """Typing extends the selected atom."""
    view = sample_view(cursor=[1, 0])
    view.append_char("z")
    assert view.selected == Atom("az")


def test_append_char_to_empty_list_starts_atom():
    """Typing into an empty list starts an atom and selects it."""
    view = make_view([[], "a"], cursor=[0])
    view.append_char("q")
    assert view.cursor == [0, 0]
    assert view.expr == build([["q"], "a"])


def test_append_char_to_label_is_noop():
    """Labels are not editable."""
    view = make_view([Label("let"), "x"], cursor=[0])
    view.append_char("s")
    assert view.selected == Label("let")


def test_append_char_to_nonempty_list_is_noop():
    """Typing on a non-empty list does nothing."""
    view = sample_view(cursor=[1])
    view.append_char("s")
    assert view.selected == build(["a", "b", "c"])
    assert view.cursor == [1]


def test_delete_char_drops_last_character():
    """Backspace removes the last character."""
    view = make_view(["abc"], cursor=[0])
    view.delete_char()
    assert view.selected == Atom("ab")


def test_delete_last_char_leaves_empty_list():
    """An atom never becomes empty; it turns into an empty list."""
    view = make_view(["a"], cursor=[0])
    view.delete_char()
    assert view.selected == Inline([])
    assert view.cursor == [0]


def test_append_then_delete_returns_to_empty_list():
    """Typing then deleting one character restores an empty list."""
    view = make_view([[]], cursor=[0])
    view.append_char("x")
    assert view.cursor == [0, 0]
    view.delete_char()
    assert view.selected == Inline([])
    assert view.expr == build([[[]]])


def test_delete_char_on_list_is_noop():
    """Backspace on a list does nothing."""
    view = sample_view(cursor=[1])
    view.delete_char()
    assert view.expr == build([["x"], ["a", "b", "c"], ["y"]])


def test_delete_char_keeps_style():
    """Replacing an atom keeps its style."""
    view = SexprView(build([Styled(Style.FRAME, Atom("a"))]), cursor=[0])
    view.delete_char()
    assert view.expr.children[0] == Styled(Style.FRAME, Inline([]))


# --- Structural editing ---

def test_delete_element_selects_next_sibling():
    """After a delete the next sibling is selected."""
    view = sample_view(cursor=[1, 1])
    view.delete_element()
    assert view.expr == build([["x"], ["a", "c"], ["y"]])
    assert view.cursor == [1, 1]
    assert view.selected == Atom("c")


def test_delete_last_element_clamps_index():
    """Deleting the last child selects the new last child."""
    view = sample_view(cursor=[1, 2])
    view.delete_element()
    assert view.cursor == [1, 1]
    assert view.selected == Atom("b")


def test_delete_only_element_selects_parent():
    """Deleting an only child selects the emptied parent."""
    view = sample_view(cursor=[0, 0])
    view.delete_element()
    assert view.cursor == [0]
    assert view.selected == Inline([])


def test_delete_element_at_root_is_noop():
    """The root cannot be deleted."""
    view = sample_view()
    view.delete_element()
    assert view.expr == build([["x"], ["a", "b", "c"], ["y"]])


def test_delete_element_inside_quotation_is_noop():
    """The content of a quotation cannot be deleted."""
    view = SexprView(build([Quotation(Atom("a"))]), cursor=[0, 0])
    view.delete_element()
    assert view.expr == build([Quotation(Atom("a"))])
    assert view.cursor == [0, 0]


@pytest.mark.parametrize("cursor", [[0], [1], [2], [1, 0], [1, 1], [1, 2], [0, 0], [2, 0]])
def test_delete_element_always_leaves_valid_cursor(cursor):
    """Repeated deletes always leave the cursor on a node."""
    view = sample_view(cursor=cursor)
    while view.cursor:
        view.delete_element()
        assert view.tree.is_valid_path(view.cursor)


def test_insert_after_adds_placeholder_and_selects_it():
    """An empty list is inserted after the selection and selected."""
    view = sample_view(cursor=[1, 0])
    view.insert_after()
    assert view.expr == build([["x"], ["a", [], "b", "c"], ["y"]])
    assert view.cursor == [1, 1]


def test_insert_after_last_element():
    """Inserting after the last child appends."""
    view = sample_view(cursor=[2])
    view.insert_after()
    assert view.cursor == [3]
    assert view.selected == Inline([])


def test_insert_after_at_root_is_noop():
    """Nothing can be inserted beside the root."""
    view = sample_view()
    view.insert_after()
    assert view.expr == build([["x"], ["a", "b", "c"], ["y"]])
    assert view.cursor == []


def test_insert_after_inside_quotation_goes_after_quotation():
    """Inside a quotation the insertion goes after the quotation."""
    view = SexprView(build(["f", Quotation(build(["a", "b"]))]), cursor=[1, 0])
    view.insert_after()
    assert view.expr == build(["f", Quotation(build(["a", "b"])), []])
    assert view.cursor == [2]


def test_insert_after_in_list_inside_quotation_splices_list():
    """A list inside a quotation takes the insertion itself."""
    view = SexprView(build(["f", Quotation(build(["a", "b"]))]), cursor=[1, 0, 0])
    view.insert_after()
    assert view.expr == build(["f", Quotation(build(["a", [], "b"]))])
    assert view.cursor == [1, 0, 1]


def test_insert_after_quoted_root_is_noop():
    """A quoted root has no list to insert into."""
    view = SexprView(Quotation(Atom("a")), cursor=[0])
    view.insert_after()
    assert view.expr == Quotation(Atom("a"))
    assert view.cursor == [0]


def test_wrap_in_list_descends_into_new_list():
    """Wrapping selects the original node inside the new list."""
    view = sample_view(cursor=[1, 1])
    view.wrap_in_list()
    assert view.expr == build([["x"], ["a", ["b"], "c"], ["y"]])
    assert view.cursor == [1, 1, 0]
    assert view.selected == Atom("b")


def test_wrap_root():
    """The root can be wrapped."""
    view = make_view(["a"])
    view.wrap_in_list()
    assert view.expr == build([["a"]])
    assert view.cursor == [0]


def test_unwrap_singleton_list():
    """A one-element list is replaced by its element."""
    view = sample_view(cursor=[0])
    view.unwrap_singleton()
    assert view.expr == build(["x", ["a", "b", "c"], ["y"]])
    assert view.selected == Atom("x")


def test_unwrap_longer_list_is_noop():
    """Lists with several elements are not unwrapped."""
    view = sample_view(cursor=[1])
    view.unwrap_singleton()
    assert view.expr == build([["x"], ["a", "b", "c"], ["y"]])


def test_unwrap_atom_is_noop():
    """Atoms cannot be unwrapped."""
    view = sample_view(cursor=[1, 0])
    view.unwrap_singleton()
    assert view.selected == Atom("a")


def test_quote_and_unquote():
    """Unwrapping a quotation undoes quoting."""
    view = sample_view(cursor=[1])
    view.quote()
    assert view.selected == Quotation(build(["a", "b", "c"]))
    assert view.cursor == [1]
    view.unwrap_singleton()
    assert view.expr == build([["x"], ["a", "b", "c"], ["y"]])


def test_quotation_is_not_a_list():
    """A quotation has exactly one child and no siblings inside it."""
    view = sample_view(cursor=[0, 0])
    view.quote()
    view.move_into()
    assert view.cursor == [0, 0, 0]
    assert view.selected == Atom("x")
    view.move_sibling(1)
    assert view.cursor == [0, 0, 0]


# --- Display ---

def test_resize_changes_layout_width():
    """The view width drives the layout width."""
    view = make_view([Label("let"), [["a", 1], ["b", 2], ["c", 3]], ["+", "a", "b"]], width=40)
    assert str(view) == "(let ((a 1) (b 2) (c 3)) (+ a b))"
    view.resize(15, 10)
    assert view.size() == (15, 10)
    assert str(view) == "(let\n  ((a 1)\n   (b 2)\n   (c 3))\n  (+ a b))"


def test_draw_highlights_selection():
    """Drawing highlights the selection on a default background."""
    view = make_view(["if", "q", "a", "e"], cursor=[1], width=12, height=2)
    buf = TextBuffer(12, 2, style=Style.BACKGROUND)
    view.draw(buf, 0, 0)
    assert buf.row_text(0) == "(if q a e)  "
    assert buf.get_style(0, 0) == Style.DEFAULT
    assert buf.get_style(4, 0) == Style.HIGHLIGHT
    assert buf.get_style(5, 0) == Style.DEFAULT
    assert buf.get_style(11, 1) == Style.DEFAULT


def test_draw_does_not_modify_tree():
    """Drawing styles a copy, not the tree."""
    view = make_view([Label("let"), [["a", 1], ["b", 2]]], cursor=[1, 0], width=10)
    before = build([Label("let"), [["a", 1], ["b", 2]]])
    view.draw(TextBuffer(20, 10), 0, 0)
    assert view.expr == before
