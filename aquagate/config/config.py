# aquagate/config/config.py
import os
from dotenv import load_dotenv

# ====================================================
# Load Environment Variables - MUST BE FIRST
# ====================================================
load_dotenv()

# ====================================================
# Server Configuration
# ====================================================
DEBUG = os.getenv("DEBUG", "False").lower() == "true"
PORT = int(os.getenv("PORT", 5000))
MAX_CONTENT_LENGTH = int(os.getenv("MAX_CONTENT_LENGTH", 1048576))  # 1MB of transcript is plenty

# ====================================================
# Logging
# ====================================================
LOG_DIR = os.getenv("LOG_DIR", "logs")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# ====================================================
# Conversation Type Classifier
# ====================================================
# Only the most recent user turns carry the current intent
CLASSIFIER_RECENT_USER_MESSAGES = int(os.getenv("CLASSIFIER_RECENT_USER_MESSAGES", 3))

# ====================================================
# Scope Classifier
# ====================================================
SCOPE_RECENT_WINDOW = int(os.getenv("SCOPE_RECENT_WINDOW", 4))
SCOPE_SHORT_MESSAGE_MAX_TOKENS = int(os.getenv("SCOPE_SHORT_MESSAGE_MAX_TOKENS", 6))
