"""
Core configuration and environment variables
"""
import os
from decimal import Decimal
from dotenv import load_dotenv

load_dotenv()

# Google / Firestore
FIREBASE_CREDENTIALS = os.getenv("FIREBASE_CREDENTIALS")
FIRESTORE_PROJECT = os.getenv("FIRESTORE_PROJECT")

# Identity tokens
AUTH_AUDIENCE = os.getenv("AUTH_AUDIENCE")
AUTH_ISSUER = os.getenv("AUTH_ISSUER")
AUTH_CERTS_URL = os.getenv("AUTH_CERTS_URL", "https://www.googleapis.com/oauth2/v1/certs")

# HTTP
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:3000")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Owner defaults and budget rules
DEFAULT_MONTHLY_BUDGET_LIMIT = Decimal(os.getenv("DEFAULT_MONTHLY_BUDGET_LIMIT", "10000"))
DEFAULT_CURRENCY = os.getenv("DEFAULT_CURRENCY", "LKR")
BUDGET_ALERT_THRESHOLD = Decimal(os.getenv("BUDGET_ALERT_THRESHOLD", "90"))
DEFAULT_PATTERN_MONTHS = int(os.getenv("DEFAULT_PATTERN_MONTHS", "6"))
MAX_PATTERN_MONTHS = 120
