"""
Centralized constants for the KDP Book Formatter.
All magic numbers used by the formatting pipeline live here.
"""

# ===========================================
# TEMPLATES
# ===========================================
DEFAULT_TEMPLATE_ID = "fiction"       # fallback for unknown template ids

# ===========================================
# UNITS
# ===========================================
POINTS_PER_INCH = 72                  # PDF base unit
DEFAULT_BASE_FONT_PT = 12.0           # em reference when no font size is known

# ===========================================
# PAGINATION
# ===========================================
DEFAULT_WIDOWS = 2                    # min lines left at the top of a page
DEFAULT_ORPHANS = 2                   # min lines left at the bottom of a page
DEFAULT_LINE_HEIGHT = 1.2             # leading multiplier when unspecified

# ===========================================
# LAYOUT ENGINE
# ===========================================
DEFAULT_LAYOUT_ENGINE = "reportlab"
RENDER_TIMEOUT_SECONDS = 60.0         # external engine hard limit
SOFFICE_KILL_GRACE_SECONDS = 5.0      # wait after kill() before giving up

# ===========================================
# DIRECTORIES
# ===========================================
OUTPUT_DIR = 'data/output'
TEMP_DIR = 'data/temp'

# ===========================================
# LOGGING
# ===========================================
LOG_LEVEL = 'INFO'
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_FILE = 'logs/formatter.log'
LOG_MAX_SIZE_MB = 10
LOG_BACKUP_COUNT = 5
