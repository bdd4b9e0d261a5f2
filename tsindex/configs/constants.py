"""
tsindex Constants

Static configuration values that rarely change: source extensions,
directory filters, size limits, and rendering limits.
"""

# --- Source Files ---

# Extensions indexed when nothing else is configured
DEFAULT_EXTENSIONS = {".ts"}

# Declaration-only files carry no emitted runtime declarations
DECLARATION_FILE_SUFFIXES = (".d.ts", ".d.mts", ".d.cts")

# Path segments that mark a test tree (compared lowercased)
TEST_DIR_NAMES = {"tests", "test", "__tests__"}

# Directories pruned during the walk. Build outputs (dist, build, out, ...) are
# real module names in some libraries, so they are opt-in via config.yaml.
DEFAULT_IGNORE_PATTERNS = {
    # Version control
    ".git",
    ".svn",
    ".hg",
    # Dependencies
    "node_modules",
}

# Maximum file size to index (in bytes)
MAX_FILE_SIZE = 2_000_000

# --- Rendering ---

# Initializer previews longer than this are cut and suffixed with "..."
VALUE_PREVIEW_LIMIT = 100

# Enum members shown in the one-line signature
ENUM_PREVIEW_MEMBERS = 5

# --- Queries ---

DEFAULT_FUZZY_LIMIT = 20

# Length of the "top" name lists in statistics
TOP_LIST_LIMIT = 10
