"""
Business logic for users.

Users live in the ``users`` collection of the record store.  The
stored record carries the bcrypt digest under ``password``; every
method returns ``UserRead`` models, which have no password field, so
digests never leave this module.

Logging in with an unknown email registers a new member on the spot
("auto-register") with a random codename and random starting stats.
"""

import logging
import random
import secrets
import string
from typing import Any, Dict, List, Optional, Tuple

from ..core.config import Settings
from ..core.errors import Conflict, InvalidCredentials, NotFound, ValidationError
from ..core.security import hash_password, verify_password
from ..core.store import USERS, RecordStore, find_by_id, now_iso, remove_by_id
from ..schemas.user import UserCreate, UserRead, UserUpdate

logger = logging.getLogger(__name__)

DEFAULT_RANK = "Initiate"
DEFAULT_STATUS = "Active"
CODENAME_PREFIX = "Agent-"
CODENAME_ALPHABET = string.ascii_uppercase + string.digits


def generate_codename() -> str:
    return CODENAME_PREFIX + "".join(random.choices(CODENAME_ALPHABET, k=6))


def _find_by_email(records: List[Dict[str, Any]], email: str) -> Optional[Dict[str, Any]]:
    return next((record for record in records if record.get("email") == email), None)


class UserService:
    """Service for user accounts.

    Provides login with auto-registration, the administrator CRUD
    operations and the bootstrap of the first administrator.
    """

    def __init__(self, store: RecordStore, settings: Settings) -> None:
        self.store = store
        self.settings = settings

    async def authenticate(self, email: Optional[str], password: Optional[str]) -> Tuple[Dict[str, Any], bool]:
        """Log a user in, registering them first if the email is unknown.

        Returns the stored record (including the digest, for token
        issuance by the caller) and whether it was just created.
        Raises ``ValidationError`` if either field is missing and
        ``InvalidCredentials`` if the password does not match.
        """
        if not email or not password:
            raise ValidationError("Email and password required")

        record = _find_by_email(self.store.load(USERS), email)
        created = False
        if record is None:
            # Hash outside the collection lock; bcrypt is deliberately slow.
            hashed = hash_password(password, self.settings.bcrypt_rounds)
            with self.store.transaction(USERS) as records:
                record = _find_by_email(records, email)
                if record is None:
                    record = self._new_member(records, email, hashed)
                    records.append(record)
                    created = True
            if created:
                logger.info("Auto-registered user %s as %s (id=%s)", email, record["codename"], record["id"])
                return record, True

        if not verify_password(password, record.get("password")):
            logger.warning("Login failed: invalid password for %s", email)
            raise InvalidCredentials("Invalid credentials")
        return record, created

    def _new_member(self, records: List[Dict[str, Any]], email: str, hashed: str) -> Dict[str, Any]:
        timestamp = now_iso()
        return {
            "id": self.store.allocate_id(USERS, records),
            "email": email,
            "password": hashed,
            "codename": generate_codename(),
            "rank": DEFAULT_RANK,
            "goatLevel": random.randrange(25, 75),
            "rizz": random.randrange(25, 75),
            "status": DEFAULT_STATUS,
            "isAdmin": False,
            "joinDate": timestamp,
            "createdAt": timestamp,
        }

    async def list_users(self) -> List[UserRead]:
        """Return all users without their password digests."""
        return [UserRead.model_validate(record) for record in self.store.load(USERS)]

    async def get_user_by_id(self, user_id: int) -> UserRead:
        """Return a single user; raises ``NotFound`` if there is none."""
        record = find_by_id(self.store.load(USERS), user_id)
        if record is None:
            raise NotFound("User not found")
        return UserRead.model_validate(record)

    async def create_user(self, data: UserCreate) -> UserRead:
        """Create a user on behalf of an administrator."""
        if not data.email or not data.password or not data.codename:
            raise ValidationError("Missing required fields")
        if _find_by_email(self.store.load(USERS), data.email) is not None:
            raise Conflict("User already exists")

        hashed = hash_password(data.password, self.settings.bcrypt_rounds)
        with self.store.transaction(USERS) as records:
            # Re-check under the lock in case of a concurrent create.
            if _find_by_email(records, data.email) is not None:
                raise Conflict("User already exists")
            timestamp = now_iso()
            record = {
                "id": self.store.allocate_id(USERS, records),
                "email": data.email,
                "password": hashed,
                "codename": data.codename,
                "rank": data.rank or DEFAULT_RANK,
                "goatLevel": data.goat_level or 50,
                "rizz": data.rizz or 50,
                "status": DEFAULT_STATUS,
                "isAdmin": bool(data.is_admin),
                "joinDate": timestamp,
                "createdAt": timestamp,
            }
            records.append(record)
        logger.info("Created user %s (id=%s)", data.email, record["id"])
        return UserRead.model_validate(record)

    async def update_user(self, user_id: int, data: UserUpdate) -> UserRead:
        """Apply the supplied fields to a user and stamp ``updatedAt``."""
        changes = data.model_dump(by_alias=True, exclude_none=True)
        with self.store.transaction(USERS) as records:
            record = find_by_id(records, user_id)
            if record is None:
                raise NotFound("User not found")
            record.update(changes)
            record["updatedAt"] = now_iso()
        logger.info("Updated user %s: %s", user_id, sorted(changes))
        return UserRead.model_validate(record)

    async def delete_user(self, user_id: int) -> None:
        """Hard-delete a user; raises ``NotFound`` if the id is unknown."""
        with self.store.transaction(USERS) as records:
            if not remove_by_id(records, user_id):
                raise NotFound("User not found")
        logger.info("Deleted user %s", user_id)

    async def ensure_admin(self) -> Optional[UserRead]:
        """Create the first administrator if the user store is empty.

        Credentials come from ``Settings.admin_email`` and
        ``Settings.admin_password``.  Without a configured password a
        random one is generated and logged once so the operator can
        sign in.  Returns the created user, or ``None`` if users exist.
        """
        password = self.settings.admin_password
        generated = not password
        if generated:
            password = secrets.token_urlsafe(12)
        with self.store.transaction(USERS) as records:
            if records:
                return None
            timestamp = now_iso()
            record = {
                "id": self.store.allocate_id(USERS, records),
                "email": self.settings.admin_email,
                "password": hash_password(password, self.settings.bcrypt_rounds),
                "codename": "The Founder",
                "rank": "The Almighty",
                "goatLevel": 100,
                "rizz": 100,
                "status": DEFAULT_STATUS,
                "isAdmin": True,
                "joinDate": timestamp,
                "createdAt": timestamp,
            }
            records.append(record)
        if generated:
            logger.warning(
                "ADMIN_PASSWORD is not set; generated password for %s: %s",
                self.settings.admin_email,
                password,
            )
        logger.info("Default admin user created: %s", self.settings.admin_email)
        return UserRead.model_validate(record)
