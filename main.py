#!/usr/bin/env python3
"""sxedit - A structural editor for nested-list expressions.

Usage:
    python main.py

Controls:
    Left / Right: Select parent / first child
    Up / Down: Previous / next sibling (wraps around)
    Type to append to the selected atom
    Backspace: Delete last character
    Space: Insert an empty sibling after the selection
    ( or PageUp: Wrap selection in a list
    PageDown: Unwrap a one-element list or quotation
    ': Quote selection
    Delete: Remove selection
    Esc or Ctrl-Q: Quit
"""

from sxedit.editor import Editor


def main():
    """Entry point for the editor."""
    Editor().run()
    print("\nGoodbye!")


if __name__ == "__main__":
    main()
