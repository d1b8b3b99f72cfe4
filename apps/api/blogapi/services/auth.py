"""Account service layer."""

import logging

from starlette.concurrency import run_in_threadpool

from blogapi.adapters.auth import TokenVerifier
from blogapi.core.clock import Clock
from blogapi.core.logging_safety import mask_email, safe_log_identifier
from blogapi.core.security import hash_password, verify_password
from blogapi.domain.results import Failure, FailureKind
from blogapi.repositories.base import CredentialStore, UserRecord
from blogapi.schemas.auth import AuthResponse

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(
        self,
        store: CredentialStore,
        verifier: TokenVerifier,
        clock: Clock,
        *,
        bcrypt_rounds: int = 12,
    ) -> None:
        self._store = store
        self._verifier = verifier
        self._clock = clock
        self._bcrypt_rounds = bcrypt_rounds

    async def signup(self, *, name: str, email: str, password: str) -> AuthResponse | Failure:
        if self._store.get_user_by_email(email) is not None:
            logger.info("auth.signup_rejected email=%s reason=email_taken", mask_email(email))
            return _email_taken()

        # bcrypt is CPU-bound; keep it off the event loop. Store calls stay on the loop.
        password_hash = await run_in_threadpool(hash_password, password, rounds=self._bcrypt_rounds)
        record = self._store.create_user(name=name, email=email, password_hash=password_hash)
        if record is None:
            # Registered concurrently between the lookup and the insert.
            return _email_taken()

        logger.info("auth.signup user_id=%s", safe_log_identifier(record.id, prefix="pid"))
        return self._authenticated(record)

    async def login(self, *, email: str, password: str) -> AuthResponse | Failure:
        record = self._store.get_user_by_email(email)
        stored_hash = record.password_hash if record is not None else None
        matched = await run_in_threadpool(verify_password, password, stored_hash, rounds=self._bcrypt_rounds)
        if not matched or record is None:
            logger.info("auth.login_rejected email=%s", mask_email(email))
            return Failure(
                kind=FailureKind.UNAUTHENTICATED,
                code="INVALID_CREDENTIALS",
                message="Invalid email or password",
            )

        logger.info("auth.login user_id=%s", safe_log_identifier(record.id, prefix="pid"))
        return self._authenticated(record)

    def _authenticated(self, record: UserRecord) -> AuthResponse:
        issued = self._verifier.issue(record.id, now=self._clock())
        return AuthResponse(id=record.id, name=record.name, email=record.email, token=issued.token)


def _email_taken() -> Failure:
    return Failure.conflict("EMAIL_ALREADY_REGISTERED", "User already exists")
