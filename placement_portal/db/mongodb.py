"""
MongoDB Connection Utility

MongoDB stores:
- students: registered students (bcrypt password hashes)
- teachers: registered teachers
- placements: posted placement drives
- sessions: server-side login sessions

Collection names match the ones the portal has always used, so
existing data keeps working.
"""
import logging

from pymongo import ASCENDING, MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError

from placement_portal.core.config import Settings, get_settings

logger = logging.getLogger(__name__)

# Global client (connection pooling handled internally by pymongo)
_client: MongoClient = None


def get_mongo_client(settings: Settings = None) -> MongoClient:
    """Get or create MongoDB client (singleton pattern)"""
    global _client
    if _client is None:
        settings = settings or get_settings()
        _client = MongoClient(settings.mongodb_uri)
    return _client


def get_mongo_db(settings: Settings = None) -> Database:
    """Get the placement database"""
    settings = settings or get_settings()
    return get_mongo_client(settings)[settings.mongodb_db]


def test_mongo_connection(db: Database) -> bool:
    """
    Test if MongoDB is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        # ping command checks connection
        db.client.admin.command('ping')
        return True
    except PyMongoError as e:
        logger.warning("MongoDB connection failed: %s", e)
        return False


# Collection name constants (avoid typos)
COLLECTIONS = {
    "students": "students",
    "teachers": "teachers",
    "placements": "placements",
    "sessions": "sessions"
}


def init_mongo_indexes(db: Database):
    """
    Create indexes for lookups and session expiry.
    Call this once during app startup.
    """
    # Login looks principals up by email; unique within each collection
    db[COLLECTIONS["students"]].create_index("email", unique=True)
    db[COLLECTIONS["teachers"]].create_index("email", unique=True)

    # Let MongoDB reap expired sessions
    db[COLLECTIONS["sessions"]].create_index(
        [("expires_at", ASCENDING)],
        expireAfterSeconds=0
    )

    logger.info("MongoDB indexes created successfully")
