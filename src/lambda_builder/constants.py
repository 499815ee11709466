# ==========================================
# 1. Project Layout
# ==========================================
FUNCTIONS_DIR_NAME = "src/functions"
OUTPUT_DIR_NAME = "dist"
BUILD_CONFIG_FILE = "lambda-build.config.json"

# ==========================================
# 2. Function Files
# ==========================================
METADATA_SUFFIX = ".json"
ENTRY_EXTENSIONS = (".ts", ".js")
ENTRY_INDEX_NAME = "index"

# Key in a function's metadata listing modules provided by the runtime
METADATA_EXTERNALS_KEY = "nodeExternals"

# ==========================================
# 3. Bundler
# ==========================================
ESBUILD_BINARY_NAME = "esbuild"
LOCAL_ESBUILD_BINARY = "node_modules/.bin/esbuild"
DEFAULT_NODE_TARGET = "node18"
LOGGING_DEFINE = "process.env.LOGGING"

# ==========================================
# 4. Packaging
# ==========================================
ARCHIVE_ENTRY_NAME = "lambda.js"
ZIP_EXTENSION = ".zip"

# ==========================================
# 5. Watch Mode
# ==========================================
DEFAULT_WATCH_INTERVAL_SECONDS = 0.5
WATCH_IGNORED_DIRS = {"node_modules", ".git"}

USAGE = (
    "Usage: lambda-build [function_name] [--logging] [--watch] "
    "[--loggingLevel=[debug|info|warn|error]]"
)
