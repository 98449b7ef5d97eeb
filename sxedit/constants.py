"""Constants and configuration for the sxedit editor."""

class EditorConstants:
    """Central configuration constants for the editor."""

    # Layout
    MAX_CODE_WIDTH = 15  # Widest list rendered on one line by default
    DEFAULT_INDENT = 2  # Indent of arguments after an atomic head

    # View geometry
    VIEW_WIDTH = 25
    VIEW_HEIGHT = 10
    VIEW_X = 7  # Column of the framed view's top-left corner
    VIEW_Y = 2  # Row of the framed view's top-left corner

    # Resize handling
    RESIZE_PIPE_MARKER = b'R'  # Byte written to pipe to signal resize

    # Configuration
    CONFIG_APP_NAME = "sxedit"
    CONFIG_FILE_NAME = "settings.json"
    LOG_ENV_VAR = "SXEDIT_LOG"

    # Status messages
    TERMINAL_TOO_SMALL_MESSAGE = "Terminal too small! Need at least {}x{}."
