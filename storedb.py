import logging
from datetime import datetime, timezone

from pymongo import MongoClient
from pymongo.errors import PyMongoError

from config import FONT_CACHE_ENABLED, MONGO_URI

logger = logging.getLogger(__name__)

_font_css = None


# ---------- FONT STYLESHEET CACHE ----------

def _font_collection():
    global _font_css
    if _font_css is None:
        client = MongoClient(MONGO_URI, serverSelectionTimeoutMS=2000)
        db = client["figma_to_code"]
        collection = db["font_css"]
        collection.create_index([("url", 1)], unique=True)
        _font_css = collection
    return _font_css


def get_cached_font_css(url: str):
    if not FONT_CACHE_ENABLED:
        return None
    try:
        doc = _font_collection().find_one({"url": url}, {"_id": 0})
    except PyMongoError as e:
        logger.warning("[CACHE] Font cache lookup failed: %s", e)
        return None
    return doc.get("css") if doc else None


def save_font_css(url: str, family: str, css: str):
    if not FONT_CACHE_ENABLED:
        return
    try:
        _font_collection().update_one(
            {"url": url},
            {
                "$set": {
                    "url": url,
                    "family": family,
                    "css": css,
                    "updated_at": datetime.now(timezone.utc),
                }
            },
            upsert=True,
        )
    except PyMongoError as e:
        logger.warning("[CACHE] Could not store font CSS for %s: %s", family, e)
