"""Shared constants for the path navigator."""

# ANSI escape sequences
ESC = "\x1b"
CSI = f"{ESC}["
RESET = f"{CSI}0m"
REVERSE = f"{CSI}7m"
CLEAR_LINE = f"{CSI}2K"
CLEAR_DOWN = f"{CSI}J"

# Cursor and mouse reporting (any-motion tracking + SGR coordinates)
HIDE_CURSOR = f"{CSI}?25l"
SHOW_CURSOR = f"{CSI}?25h"
ENABLE_MOUSE = f"{CSI}?1000h{CSI}?1003h{CSI}?1006h"
DISABLE_MOUSE = f"{CSI}?1006l{CSI}?1003l{CSI}?1000l"

# Environment variable selecting the keymap
KEYMAP_ENV_VAR = "PD_KEYMAP"

# Process exit statuses
EXIT_OK = 0
EXIT_QUIT = 1
EXIT_ERROR = 2

# Sentinel segment for paths with no nameable components
CURRENT_DIR = "."
