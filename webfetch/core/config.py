import os
from dotenv import load_dotenv
from pathlib import Path

# load .env at startup from project root
# Path(__file__) is webfetch/core/config.py, so we go up 2 levels to reach project root
project_root = Path(__file__).parent.parent.parent
load_dotenv(dotenv_path=project_root / ".env")

# Outbound request defaults
WEBFETCH_TIMEOUT = float(os.getenv("WEBFETCH_TIMEOUT", "30"))
WEBFETCH_USER_AGENT = os.getenv("WEBFETCH_USER_AGENT", "webfetch/0.1")

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE")
