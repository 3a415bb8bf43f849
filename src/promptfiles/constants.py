"""Constants used throughout the application."""

# Input settings
DEFAULT_OUTPUT_DIR = "output"
API_KEY_ENV = "GEMINI_API_KEY"
PROMPT_CUE = "Enter your prompt"

# Model settings
DEFAULT_MODEL = "gemini-2.0-flash"
DEFAULT_TIMEOUT = 120.0
RESPONSE_MIME_TYPE = "application/json"

# Filesystem permissions
DIR_MODE = 0o755
FILE_MODE = 0o644
