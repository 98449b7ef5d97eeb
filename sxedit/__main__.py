"""sxedit CLI entry point.

Allows running via `python -m sxedit` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional

from .constants import EditorConstants
from .version import get_version_string


def _escape_bytes(s: str) -> str:
    """Return a printable representation of raw key string."""
    return s.encode('unicode_escape').decode('ascii')


def configure_logging(path: Optional[str]) -> None:
    """Send log records to ``path``; without a path logging stays silent.

    The editor owns the whole screen, so records never go to the terminal.
    """
    if not path:
        logging.getLogger().addHandler(logging.NullHandler())
        return
    logging.basicConfig(
        filename=path,
        level=logging.DEBUG,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )


def run_keyboard_test() -> None:
    """Print the key and editor event for each keypress. Quit with ESC."""
    from .terminal import TerminalInterface
    from .keyboard import KeyboardHandler, KeyType
    from .events import adapt_key_event

    print("Keyboard test mode: press keys to see parsed events.")
    print("Quit with ESC.")

    term = TerminalInterface()
    term.setup()
    kb = KeyboardHandler(term)
    try:
        while True:
            ev = kb.get_key_event(timeout=None)
            if not ev:
                continue
            if ev.key_type == KeyType.SPECIAL and ev.value == 'escape':
                print("Exiting keyboard test.")
                break
            event = adapt_key_event(ev)
            print(f"type={ev.key_type.value} value={ev.value} raw='{_escape_bytes(ev.raw)}' "
                  f"event={event.type.value}")
    finally:
        term.cleanup()


def parse_args(args: list[str]) -> dict:
    """Very small argument parser: --version, --keytest, --log FILE."""
    options = {'version': False, 'keytest': False, 'log': os.environ.get(EditorConstants.LOG_ENV_VAR)}
    i = 0
    while i < len(args):
        arg = args[i]
        if arg in ('--version', '-V'):
            options['version'] = True
        elif arg in ('--keytest', '--keyboard-test'):
            options['keytest'] = True
        elif arg == '--log' and i + 1 < len(args):
            i += 1
            options['log'] = args[i]
        elif arg.startswith('--log='):
            options['log'] = arg.split('=', 1)[1]
        else:
            raise SystemExit(f"sxedit: unknown argument {arg!r}")
        i += 1
    return options


def main() -> None:
    options = parse_args(sys.argv[1:])
    if options['version']:
        print(get_version_string())
        return
    configure_logging(options['log'])
    if options['keytest']:
        run_keyboard_test()
        return

    # Lazy import to avoid importing UI deps for --version
    from .editor import Editor
    Editor().run()


if __name__ == "__main__":  # pragma: no cover
    main()
