# constants.py - Define constants used throughout the application

# --- File/Directory Names ---
DEFAULT_OUTPUT_DIR = "output"
DEFAULT_LOG_FILE = "mirror.log"
DEFAULT_PAGE_SUFFIX = "html" # Suffix for top-level pages; also drives HTML classification
INDEX_FILENAME_BASE = "index" # Base name for root/trailing-slash paths
RESOURCE_DIR_SUFFIX = "-res" # Appended to a page's target path for its asset folder

# --- Classification ---
HTML_EXTENSION = "html" # Case-sensitive; a target path ending in this is parsed as HTML

# --- Request Defaults ---
DEFAULT_USER_AGENT = "PageMirror/1.0"
DEFAULT_REQUEST_TIMEOUT = 60 # Seconds, per request
DEFAULT_MAX_RETRIES = 0 # Transport retries; 0 means every failure is terminal
DEFAULT_REQUEST_DELAY = 1.0 # Base backoff delay in seconds when retries are enabled
DEFAULT_MAX_WORKERS = 1 # Concurrent sibling asset fetches per page; 1 is sequential
DEFAULT_CHUNK_SIZE = 8192 # Bytes per chunk when streaming non-HTML bodies

# --- Asset Discovery ---
# (tag, attribute, PageData list) in processing order
ASSET_KINDS = (
    ("img", "src", "images"),
    ("link", "href", "stylesheets"),
    ("script", "src", "javascripts"),
)
