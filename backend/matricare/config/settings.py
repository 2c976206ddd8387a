import logging
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

# ── Document store ────────────────────────────────────────────────────────────
SUPABASE_URL = os.getenv('SUPABASE_URL', '')
SUPABASE_KEY = os.getenv('SUPABASE_KEY', '')

MEDICAL_HISTORY_TABLE = os.getenv('MEDICAL_HISTORY_TABLE', 'medical_history')
USERS_TABLE           = os.getenv('USERS_TABLE', 'users')
STORE_KEY_COLUMN      = os.getenv('STORE_KEY_COLUMN', 'id')

# ── Risk model ────────────────────────────────────────────────────────────────
RISK_MODEL_PATH = Path(os.getenv('MATRICARE_RISK_MODEL_PATH', 'models/medical_risk_model.joblib'))

# ── Server ────────────────────────────────────────────────────────────────────
HOST = os.getenv('HOST', '0.0.0.0')
PORT = int(os.getenv('PORT', 8001))


def store_configured() -> bool:
    return bool(SUPABASE_URL and SUPABASE_KEY)


if not store_configured():
    logger.warning(
        "SUPABASE_URL / SUPABASE_KEY not set. "
        "Medical history endpoints will return 503 until the store is configured."
    )
