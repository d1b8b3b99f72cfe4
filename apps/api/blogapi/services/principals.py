"""Principal resolution for verified bearer credentials."""

from blogapi.domain.results import PrincipalNotFound
from blogapi.repositories.base import CredentialStore, UserRecord
from blogapi.schemas.auth import Principal


class PrincipalResolver:
    def __init__(self, store: CredentialStore) -> None:
        self._store = store

    def resolve(self, principal_id: str) -> Principal | PrincipalNotFound:
        """Load the user behind a verified token, projected without the password hash."""
        record = self._store.get_user(principal_id)
        if record is None:
            return PrincipalNotFound(principal_id=principal_id)
        return to_principal(record)


def to_principal(record: UserRecord) -> Principal:
    return Principal(id=record.id, name=record.name, email=record.email)
