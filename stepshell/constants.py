"""Constants used throughout the stepshell package."""

from pathlib import Path
from colorama import Fore, Style

# Configuration paths
CONFIG_DIR = Path.home() / ".config" / "stepshell"

# ANSI Color Codes (using colorama)
CLR_RESET = Style.RESET_ALL
CLR_RED = Fore.RED
CLR_BOLD_RED = Style.BRIGHT + Fore.RED
CLR_GREEN = Fore.GREEN
CLR_BOLD_GREEN = Style.BRIGHT + Fore.GREEN
CLR_YELLOW = Fore.YELLOW
CLR_BOLD_YELLOW = Style.BRIGHT + Fore.YELLOW
CLR_BLUE = Fore.BLUE
CLR_BOLD_BLUE = Style.BRIGHT + Fore.BLUE
CLR_MAGENTA = Fore.MAGENTA
CLR_BOLD_MAGENTA = Style.BRIGHT + Fore.MAGENTA
CLR_CYAN = Fore.CYAN
CLR_BOLD_CYAN = Style.BRIGHT + Fore.CYAN
CLR_WHITE = Fore.WHITE
CLR_BOLD_WHITE = Style.BRIGHT + Fore.WHITE

# Environment variables
ENV_API_KEY = "STEPSHELL_API_KEY"
ENV_BASE_URL = "STEPSHELL_BASE_URL"
ENV_MODEL = "STEPSHELL_MODEL"
ENV_MAX_STEPS = "STEPSHELL_MAX_STEPS"
ENV_COMMAND_TIMEOUT = "STEPSHELL_COMMAND_TIMEOUT"
LEGACY_ENV_API_KEY = "NEBIUS_API_KEY"

# Default configuration values
DEFAULT_BASE_URL = "https://api.studio.nebius.com/v1/"
DEFAULT_MODEL = "deepseek-ai/DeepSeek-R1-0528"
DEFAULT_MAX_TOKENS = 4000
DEFAULT_TEMPERATURE = 0.3
DEFAULT_TOP_P = 0.9
DEFAULT_MAX_STEPS = 20
DEFAULT_COMMAND_TIMEOUT = 30
DEFAULT_ENABLE_DEBUG = False

DEFAULT_QUERY = 'Create a folder "TODO App" and create HTML, CSS and JS files for a working ToDo App'
