from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence

from ..common.validators import missing_fields, normalize_username
from ..core.constants import IMPORT_ATTRIBUTES, IMPORT_REQUIRED_FIELDS
from ..core.enums import SkipReason
from ..core.exceptions import ImportAborted, PersistenceError
from .model import User
from .repository import UserRepository

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class SkippedCandidate:
    index: int
    username: Optional[str]
    reason: SkipReason
    missing: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {
            "index": self.index,
            "username": self.username,
            "reason": self.reason.value,
            "missing": list(self.missing),
        }


@dataclass(frozen=True)
class ImportResult:
    created: tuple[User, ...] = ()
    skipped: tuple[SkippedCandidate, ...] = ()
    # Batches of at most one candidate are passed back untouched.
    echoed: Optional[tuple[Any, ...]] = None


class UserImporter:
    """Bulk user import, one candidate at a time.

    Each candidate's uniqueness check sees every insert made earlier in the
    same batch. Invalid or duplicate candidates are skipped and reported;
    a storage failure stops the batch (ImportAborted).
    """

    def __init__(self, users: UserRepository):
        self._users = users

    def import_users(self, client_id: int, candidates: Sequence[Mapping[str, Any]]) -> ImportResult:
        candidates = list(candidates or ())
        if len(candidates) <= 1:
            return ImportResult(echoed=tuple(candidates))

        try:
            next_idn = (self._users.max_idn(client_id) or 0) + 1
        except PersistenceError as e:
            log.error("import aborted for client %s: %s", client_id, e)
            raise ImportAborted(f"Error reading idns for client {client_id}: {e}") from e

        claimed: set[str] = set()
        created: list[User] = []
        skipped: list[SkippedCandidate] = []

        for index, raw in enumerate(candidates):
            raw = raw if isinstance(raw, Mapping) else {}
            missing = tuple(missing_fields(raw, IMPORT_REQUIRED_FIELDS))
            username = None if "username" in missing else normalize_username(raw["username"])

            if missing:
                skipped.append(SkippedCandidate(index, username, SkipReason.MISSING_FIELDS, missing))
                log.info("import skip #%d (%s): missing %s", index, username, ", ".join(missing))
                continue

            fields = {a: raw[a] for a in IMPORT_ATTRIBUTES if raw.get(a)}
            fields["is_student"] = True
            try:
                if username in claimed or self._users.get_by_username(username):
                    skipped.append(SkippedCandidate(index, username, SkipReason.DUPLICATE_USERNAME))
                    log.info("import skip #%d: username %r already taken", index, username)
                    continue
                user = self._users.create_user(client_id=client_id, idn=next_idn, username=username, fields=fields)
            except PersistenceError as e:
                log.error("import aborted at #%d (%s): %s", index, username, e)
                raise ImportAborted(f"Error creating user {username!r}: {e}", created=created, index=index) from e

            claimed.add(username)
            created.append(user)
            next_idn += 1

        log.info("imported %d users for client %s (%d skipped)", len(created), client_id, len(skipped))
        return ImportResult(created=tuple(created), skipped=tuple(skipped))
