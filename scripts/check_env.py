"""Environment sanity check for the study-buddy service.

Creates a ``.env`` template when none exists and reports whether a Gemini
API key is configured.

Usage:
  uv run scripts/check_env.py
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure project root is on sys.path so `app` package imports resolve
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from app.core.config import DEFAULT_GEMINI_API_URL, GeminiSettings  # noqa: E402

ENV_TEMPLATE = f"""# Gemini API Configuration
GEMINI_API_KEY=your-gemini-api-key-here

# Optional: Custom API URL (defaults to Google's Gemini API)
# GEMINI_API_URL={DEFAULT_GEMINI_API_URL}

# Server Configuration
APP_PORT=4000
"""


def ensure_env_file(env_path: Path) -> bool:
    """Write the template if missing; return True when a file was created."""
    if env_path.exists():
        return False
    env_path.write_text(ENV_TEMPLATE, encoding="utf-8")
    return True


def main() -> int:
    env_path = ROOT / ".env"
    if ensure_env_file(env_path):
        print(f"Created {env_path} with template values")
        print("Add your actual GEMINI_API_KEY to the .env file")
    else:
        print(f"{env_path} already exists")

    gemini = GeminiSettings(_env_file=env_path)
    if not gemini.is_configured:
        print("WARNING: GEMINI_API_KEY is not set properly in .env")
        print("Get an API key from: https://aistudio.google.com/app/apikey")
        return 1
    print("GEMINI_API_KEY is configured")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
