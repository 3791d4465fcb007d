from __future__ import annotations

import logging
from concurrent.futures import Executor, ThreadPoolExecutor, TimeoutError as FutureTimeout
from typing import Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_non_empty
from ..core.constants import PIN_HASH_METHOD
from ..core.enums import Role
from ..core.exceptions import InvalidCredentials, Unavailable, ValidationError
from .model import Identity, SafeIdentity
from .repository import UserRepository

logger = logging.getLogger(__name__)


class CredentialStore:
    """Identity lookup and PIN hashing.

    ``pin_hash`` values stay inside this class; everything handed out is a
    :class:`SafeIdentity`.
    """

    def __init__(self, users: UserRepository, *, hash_method: str = PIN_HASH_METHOD):
        self._users = users
        self._hash_method = hash_method
        self._dummy_hash = generate_password_hash("0000", method=hash_method)

    def find_by_phone(self, phone: str) -> Optional[Identity]:
        return self._users.get_by_phone(phone)

    def get_safe(self, user_id: int) -> Optional[SafeIdentity]:
        user = self._users.get_by_id(user_id)
        return user.to_safe() if user else None

    def list_safe(self) -> Sequence[SafeIdentity]:
        return [u.to_safe() for u in self._users.list_all()]

    def hash_pin(self, pin: str) -> str:
        return generate_password_hash(pin, method=self._hash_method)

    @staticmethod
    def verify_pin(pin: str, pin_hash: str) -> bool:
        try:
            return check_password_hash(pin_hash, pin)
        except (ValueError, TypeError, AttributeError):
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            return False

    def verify_lookup(self, identity: Optional[Identity], pin: str) -> bool:
        """Verify ``pin`` against ``identity``, spending the same effort on a miss."""
        if identity is None:
            self.verify_pin(pin, self._dummy_hash)
            return False
        return self.verify_pin(pin, identity.pin_hash)

    def provision(self, *, user_id: int, name: str, phone: str, role: Role, pin: str) -> None:
        name = require_non_empty(name, "Name")
        phone = require_non_empty(phone, "Phone")
        pin = require_non_empty(pin, "PIN")
        if not pin.isdigit():
            raise ValidationError("PIN must be numeric")
        self._users.upsert(user_id=int(user_id), name=name, phone=phone, role=role, pin_hash=self.hash_pin(pin))


class AuthService:
    """Use case: authenticate a worker (login).

    PIN verification runs on a worker pool so it never happens while a ledger
    lock is held; ``verify_timeout`` bounds how long a login waits for it.
    """

    def __init__(
        self,
        store: CredentialStore,
        *,
        executor: Optional[Executor] = None,
        verify_timeout: Optional[float] = None,
    ):
        self._store = store
        self._executor = executor or ThreadPoolExecutor(max_workers=4, thread_name_prefix="pin-verify")
        self._verify_timeout = verify_timeout

    def authenticate(self, phone: str, pin: str) -> SafeIdentity:
        phone = (phone or "").strip()
        pin = pin or ""

        user = self._store.find_by_phone(phone) if phone else None
        future = self._executor.submit(self._store.verify_lookup, user, pin)
        try:
            ok = future.result(timeout=self._verify_timeout)
        except FutureTimeout:
            future.cancel()
            logger.error("PIN verification timed out after %ss", self._verify_timeout)
            raise Unavailable()

        if not ok:
            logger.info("login rejected (known_phone=%s)", user is not None)
            raise InvalidCredentials()

        logger.info("login accepted for user %s", user.id)
        return user.to_safe()

    def shutdown(self) -> None:
        self._executor.shutdown(wait=False)
