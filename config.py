import os
from dotenv import load_dotenv

load_dotenv()

APP_PORT = int(os.getenv("APP_PORT", "8080"))
APP_WORKERS = int(os.getenv("APP_WORKERS", "2"))
DEBUG = os.getenv("DEBUG", "false").lower() == "true"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Reject unparsable numbers instead of treating them as zero
STRICT_NUMERIC_INPUT = os.getenv("STRICT_NUMERIC_INPUT", "true").lower() == "true"

# Tax settings
DEFAULT_GST_RATE = float(os.getenv("DEFAULT_GST_RATE", "18"))
TRANSPORT_GST_RATE = float(os.getenv("TRANSPORT_GST_RATE", "18"))
INSURANCE_GST_RATE = float(os.getenv("INSURANCE_GST_RATE", "18"))

# Display price = cost / markup
TILES_MARKUP = float(os.getenv("TILES_MARKUP", "0.78"))
GRANITE_MARKUP = float(os.getenv("GRANITE_MARKUP", "0.75"))
DEFAULT_MARKUP = float(os.getenv("DEFAULT_MARKUP", "0.60"))

ROUND_OFF_STEP = float(os.getenv("ROUND_OFF_STEP", "1.0"))
