"""
Authorization registry - owner-administered allow list of principals.

Each engine holds its own instance. Only the owner fixed at construction may
change entries, and the owner check is by identity, so the owner can always
re-authorize itself after removing itself.
"""

import logging

from floodcore.models import (
    AuthErrorCode,
    AuthorizationEntry,
    OperationResult,
    Principal,
)


logger = logging.getLogger(__name__)


class AuthorizationRegistry:
    """Mapping of principal -> authorized flag with a single owner."""

    def __init__(self, owner: Principal):
        self._owner = owner
        self._entries: dict[Principal, AuthorizationEntry] = {
            owner: AuthorizationEntry(principal=owner, authorized=True),
        }

    @property
    def owner(self) -> Principal:
        return self._owner

    # --- Admin ---

    def add_authorized(self, caller: Principal, principal: Principal) -> OperationResult[bool]:
        """
        Grants principal access.

        Returns NOT_AUTHORIZED (100) unless caller is the owner.
        """
        return self._set(caller, principal, True)

    def remove_authorized(self, caller: Principal, principal: Principal) -> OperationResult[bool]:
        """
        Revokes principal access.

        Removing a principal that was never added still succeeds and
        records an explicit False entry.
        """
        return self._set(caller, principal, False)

    # --- Reads ---

    def is_authorized(self, principal: Principal) -> bool:
        entry = self.get_entry(principal)
        return entry.authorized if entry is not None else False

    def get_entry(self, principal: Principal) -> AuthorizationEntry | None:
        return self._entries.get(principal)

    def _set(self, caller: Principal, principal: Principal, authorized: bool) -> OperationResult[bool]:
        if caller != self._owner:
            logger.warning(
                "Rejected authorization change for %s by non-owner %s",
                principal, caller,
                extra={"caller": caller, "error_code": AuthErrorCode.NOT_AUTHORIZED.value},
            )
            return OperationResult[bool].failure(
                AuthErrorCode.NOT_AUTHORIZED,
                f"Caller {caller} is not the registry owner",
            )

        self._entries[principal] = AuthorizationEntry(principal=principal, authorized=authorized)
        logger.info(
            "Principal %s %s", principal, "authorized" if authorized else "deauthorized",
            extra={"caller": caller},
        )
        return OperationResult[bool].success(True)
