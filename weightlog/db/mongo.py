"""
MongoDB async connection using Motor driver.
Single client instance for connection pooling.
"""
import logging
from datetime import datetime, timezone
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection

from weightlog.core.config import settings
from weightlog.models.goal import GoalInput, GoalResult

logger = logging.getLogger(__name__)

# Module-level singleton client (created once, reused across requests)
_client: Optional[AsyncIOMotorClient] = None


def get_client() -> AsyncIOMotorClient:
    global _client
    if _client is None:
        _client = AsyncIOMotorClient(settings.MONGO_URI)
    return _client


def close_client() -> None:
    global _client
    if _client is not None:
        _client.close()
        _client = None


async def get_goals_collection() -> AsyncIOMotorCollection:
    """
    FastAPI dependency – yields the goals collection and
    ensures a unique index on uid exists (one current goal per user).
    """
    client = get_client()
    db = client[settings.MONGO_DB_NAME]
    collection = db["goals"]
    await collection.create_index("uid", unique=True)
    return collection


async def save_goal(
    collection: AsyncIOMotorCollection,
    uid: str,
    goal: GoalInput,
    result: GoalResult,
) -> None:
    """Replace the user's current goal with the newly computed one."""
    doc = {
        "uid": uid,
        "input": goal.model_dump(mode="json"),
        "result": result.model_dump(),
        "updated_at": datetime.now(timezone.utc),
    }
    try:
        await collection.update_one({"uid": uid}, {"$set": doc}, upsert=True)
    except Exception as exc:
        # runs as a background task; nothing left to report to
        logger.error("Failed to save goal for uid=%s: %s", uid, exc)
        return
    logger.info("Saved goal for uid=%s: %d kcal/day", uid, result.recommended_daily_intake)


async def load_goal(collection: AsyncIOMotorCollection, uid: str) -> Optional[dict]:
    return await collection.find_one({"uid": uid}, {"_id": 0})
