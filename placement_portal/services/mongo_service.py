"""
MongoDB Service - CRUD operations for document collections.

Collections in this database:
1. students    - Registered students (bcrypt password hashes)
2. teachers    - Registered teachers
3. placements  - Placement drives posted by teachers
4. sessions    - Server-side login sessions

Students and teachers are both "principals": they share one service
class that knows how to look a principal up and check its password.
Only the password strategy differs between the two.
"""

import secrets
from datetime import datetime, timedelta
from typing import Optional, List

from bson import ObjectId
from bson.errors import InvalidId
from pymongo.collection import Collection
from pymongo.database import Database
from starlette.concurrency import run_in_threadpool

from placement_portal.core.config import Settings
from placement_portal.core.security import BcryptVerifier, PasswordVerifier, PlaintextVerifier
from placement_portal.db.mongodb import COLLECTIONS
from placement_portal.schemas.schemas import PrincipalKind


# ============================================================
# HELPER: Convert ObjectId to string for JSON serialization
# ============================================================

def serialize_doc(doc: dict) -> dict:
    """Convert MongoDB document to JSON-serializable dict."""
    if doc is None:
        return None
    if "_id" in doc:
        doc["_id"] = str(doc["_id"])
    return doc


def serialize_docs(docs: list) -> list:
    """Convert list of MongoDB documents to JSON-serializable list."""
    return [serialize_doc(doc) for doc in docs]


def to_object_id(value) -> Optional[ObjectId]:
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


# ============================================================
# PRINCIPALS (students, teachers)
# ============================================================

class PrincipalService:
    """
    Handles one principal collection.

    The verifier decides how the password is stored on insert and
    how a login attempt is checked against it.
    """

    kind: PrincipalKind = None

    def __init__(self, collection: Collection, verifier: PasswordVerifier):
        self.collection = collection
        self.verifier = verifier

    def find_by_email(self, email: str) -> Optional[dict]:
        return self.collection.find_one({"email": email})

    def get_by_id(self, principal_id: str) -> Optional[dict]:
        """Fetch a principal by id; unknown or malformed ids give None."""
        oid = to_object_id(principal_id)
        if oid is None:
            return None
        return serialize_doc(self.collection.find_one({"_id": oid}))

    def insert(self, fields: dict, password: str) -> str:
        """
        Insert a new principal.

        Args:
            fields: Profile fields, already in document (camelCase) form
            password: Password as typed; stored through the verifier

        Returns:
            MongoDB ObjectId as string
        """
        doc = dict(fields)
        doc["password"] = self.verifier.hash(password)
        result = self.collection.insert_one(doc)
        return str(result.inserted_id)

    def list_all(self) -> List[dict]:
        """Every principal in the collection, password excluded."""
        cursor = self.collection.find({}, {"password": 0})
        return serialize_docs(list(cursor))

    def check_password(self, doc: dict, password: str) -> bool:
        return self.verifier.verify(password, doc.get("password"))

    async def authenticate(self, email: str, password: str) -> Optional[dict]:
        """
        Look the principal up and check the password, off the event loop.

        Returns the principal document, or None when the email is unknown
        or the password does not match. Callers cannot tell the two apart.
        """
        doc = await run_in_threadpool(self.find_by_email, email)
        if doc is None:
            return None
        matches = await run_in_threadpool(self.check_password, doc, password)
        return serialize_doc(doc) if matches else None

    async def register(self, fields: dict, password: str) -> str:
        return await run_in_threadpool(self.insert, fields, password)


class StudentService(PrincipalService):
    kind = PrincipalKind.student


class TeacherService(PrincipalService):
    kind = PrincipalKind.teacher


# ============================================================
# PLACEMENTS COLLECTION
# ============================================================

class PlacementService:
    """
    Handles placement drive storage.
    Drives are only ever created and listed.
    """

    def __init__(self, collection: Collection):
        self.collection = collection

    def insert(self, placement: dict) -> str:
        result = self.collection.insert_one(dict(placement))
        return str(result.inserted_id)

    def list_all(self) -> List[dict]:
        """All drives, in whatever order MongoDB returns them."""
        return serialize_docs(list(self.collection.find()))


# ============================================================
# SESSIONS COLLECTION
# ============================================================

class SessionService:
    """
    Server-side session storage.

    The session id is a random token handed to the client in a cookie;
    the data never leaves the server. Expired sessions are ignored on
    load and reaped by the TTL index on expires_at.
    """

    def __init__(self, collection: Collection, max_age_seconds: int = 86400):
        self.collection = collection
        self.max_age = timedelta(seconds=max_age_seconds)

    def create(self, data: dict) -> str:
        now = datetime.utcnow()
        session_id = secrets.token_urlsafe(32)
        self.collection.insert_one({
            "_id": session_id,
            "data": dict(data),
            "created_at": now,
            "expires_at": now + self.max_age
        })
        return session_id

    def load(self, session_id: str) -> Optional[dict]:
        doc = self.collection.find_one({
            "_id": session_id,
            "expires_at": {"$gt": datetime.utcnow()}
        })
        if doc is None:
            return None
        return doc.get("data", {})

    def save(self, session_id: str, data: dict) -> None:
        self.collection.update_one(
            {"_id": session_id},
            {
                "$set": {
                    "data": dict(data),
                    "expires_at": datetime.utcnow() + self.max_age
                },
                "$setOnInsert": {"created_at": datetime.utcnow()}
            },
            upsert=True
        )

    def destroy(self, session_id: str) -> bool:
        result = self.collection.delete_one({"_id": session_id})
        return result.deleted_count > 0


# ============================================================
# STORE: everything a request needs, passed explicitly
# ============================================================

class PortalStore:
    """
    Bundles the services over one database handle.

    Built once per app in create_app() and reached from handlers
    through the get_store dependency.
    """

    def __init__(self, db: Database, settings: Settings):
        self.db = db
        if settings.hash_teacher_passwords:
            teacher_verifier = BcryptVerifier(settings.bcrypt_rounds)
        else:
            teacher_verifier = PlaintextVerifier()

        self.students = StudentService(
            db[COLLECTIONS["students"]], BcryptVerifier(settings.bcrypt_rounds)
        )
        self.teachers = TeacherService(db[COLLECTIONS["teachers"]], teacher_verifier)
        self.placements = PlacementService(db[COLLECTIONS["placements"]])
        self.sessions = SessionService(
            db[COLLECTIONS["sessions"]], settings.session_max_age_seconds
        )

    def principals(self, kind: PrincipalKind) -> PrincipalService:
        if kind == PrincipalKind.student:
            return self.students
        return self.teachers

    def email_registered(self, email: str) -> bool:
        """True when either a student or a teacher already uses this email."""
        return (
            self.teachers.find_by_email(email) is not None
            or self.students.find_by_email(email) is not None
        )
