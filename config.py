import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

BASE_DIR = Path(__file__).resolve().parent

# ---------- TARGET PROJECT ----------
PROJECT_DIR = os.getenv("PROJECT_DIR", str(BASE_DIR / "react-app"))
TEMPLATES_DIR = os.getenv("TEMPLATES_DIR", str(BASE_DIR / "templates"))
COMPONENTS_SUBDIR = os.getenv("COMPONENTS_SUBDIR", "src/components")

DEFAULT_COMPONENT_NAME = "FigmaComponent"

# ---------- FONTS ----------
FONT_FETCH_TIMEOUT = float(os.getenv("FONT_FETCH_TIMEOUT", "5"))
FONT_CACHE_ENABLED = os.getenv("FONT_CACHE_ENABLED", "false").lower() == "true"
MONGO_URI = os.getenv("MONGO_URI", "mongodb://localhost:27017")

# ---------- SERVER ----------
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_DIR = os.getenv("LOG_DIR")
CORS_ORIGINS = [s.strip() for s in os.getenv("CORS_ORIGINS", "*").split(",") if s.strip()]
