import os
import sys
from pathlib import Path

# Ensure repo root on sys.path for imports from anywhere in tests tree.
ROOT = Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("APP_ENV", "dev")
os.environ.setdefault("CARDS_BACKEND", "memory")
os.environ.setdefault("AUTH_JWT_SIGNING", "test-jwt-secret")
