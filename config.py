"""
NeonCalc Configuration Settings
"""
import logging
import os

# Application Settings
APP_NAME = "NeonCalc"
VERSION = "1.0.0"

# Display Settings
WINDOW_WIDTH = 720
WINDOW_HEIGHT = 480
DISPLAY_FONT = ("Consolas", 28, "bold")   # LCD/segmented-style font
EXPRESSION_FONT = ("Consolas", 12)
BUTTON_FONT = ("Segoe UI", 12)
LABEL_FONT = ("Segoe UI", 10)

# ── Neon Palette ───────────────────────────────────────────────────────────────

NEON_DARK = {
    "bg":           "#1E1E1E",
    "bg_dark":      "#141414",
    "shadow_dark":  "#0B0B0B",
    "shadow_lite":  "#2C2C2C",
    "display_bg":   "#111111",
    "display_fg":   "#9BFF9B",   # confirmed result – bright green
    "preview_fg":   "#5FC46A",   # auto-preview – dimmer green
    "error_fg":     "#FF6B5E",
    "expr_fg":      "#7A7A7A",
    "btn_bg":       "#262626",
    "btn_fg":       "#E0E0E0",
    "operator_fg":  "#4DE07A",
    "advanced_fg":  "#8FB8E8",
    "equals_bg":    "#2DA84F",
    "equals_fg":    "#FFFFFF",
    "danger":       "#C0392B",
    "text":         "#D0D0D0",
    "subtext":      "#5E5E5E",
    "tree_odd":     "#202020",
    "tree_even":    "#1A1A1A",
    "tree_fg":      "#C8C8C8",
}


def get_theme() -> dict:
    """Return the active colour palette."""
    return NEON_DARK


# Data Settings
DATA_DIR = os.environ.get("NEONCALC_DATA_DIR", os.path.dirname(os.path.abspath(__file__)))
DB_PATH = os.path.join(DATA_DIR, "neoncalc.db")               # server-side history log
LOCAL_DB_PATH = os.path.join(DATA_DIR, "neoncalc_local.db")   # offline fallback log
TIMESTAMPS_PATH = os.path.join(DATA_DIR, "history_timestamps.json")

# History Settings
MAX_HISTORY_ITEMS = 10
HISTORY_RETENTION_DAYS = 7
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

# Number formatting
DIVISION_DECIMAL_PLACES = 10
PRECISE_SIGNIFICANT_DIGITS = 12
MAX_INPUT_DIGITS = 15
ERROR_TEXT = "Error"

# Web API settings
WEB_HOST = os.environ.get("NEONCALC_HOST", "127.0.0.1")
WEB_PORT = int(os.environ.get("NEONCALC_PORT", "8888"))
API_BASE_URL = os.environ.get("NEONCALC_API_URL", f"http://127.0.0.1:{WEB_PORT}")
API_TIMEOUT = float(os.environ.get("NEONCALC_API_TIMEOUT", "5"))
API_STARTUP_WAIT = 3.0

# Logging
LOG_LEVEL = os.environ.get("NEONCALC_LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level=None):
    """Configure root logging for the entry points."""
    level_name = (level or LOG_LEVEL).upper()
    logging.basicConfig(level=getattr(logging, level_name, logging.INFO), format=LOG_FORMAT)
