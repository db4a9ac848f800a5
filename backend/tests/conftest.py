from __future__ import annotations

import os
import sys
from pathlib import Path

# Ensure `backend/` is on sys.path so `import user_api.*` works in tests.
BACKEND_DIR = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(BACKEND_DIR))

# The module-level app in `user_api.main` is built at import time; keep it off AWS.
os.environ.setdefault("USER_STORE_BACKEND", "memory")
os.environ.setdefault("APP_ENV", "development")
os.environ.setdefault("AWS_REGION", "us-east-1")
