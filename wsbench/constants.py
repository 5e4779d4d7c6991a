# =============================================================================
# wsbench -- Constants
# =============================================================================

# Replaced in the URL template by the decimal task id.
ID_PLACEHOLDER = "<id>"

# -- Output modes --------------------------------------------------------------

OUTPUT_DISCARD = ""
OUTPUT_STDOUT = "-"

# -- Defaults ------------------------------------------------------------------

DEFAULT_CONCURRENCY = 1
DEFAULT_OUTPUT = OUTPUT_STDOUT
DEFAULT_TIMEOUT = 0.0  # seconds, 0 = no deadline

# -- Scheme rewrite ------------------------------------------------------------

SCHEME_MAP = {
    "http": "ws",
    "https": "wss",
}
