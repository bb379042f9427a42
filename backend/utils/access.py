# backend/utils/access.py
"""Visibility rules shared by every read and write path.

Lists: a row is listed when the caller owns it or the row is public.
Tables without a ``visibility`` column therefore list only the caller's rows,
and anonymous callers only ever see public rows.

Direct fetch: owner, then public, then private + whitelisted email.
Mutations: strict ownership, public visibility never grants write access.
"""
from dataclasses import dataclass
from typing import Callable, Optional

from sqlalchemy import false, or_

from models.item import VISIBILITY_PUBLIC
from utils.errors import PermissionDenied, Unauthorized

REASON_OWNER = "owner"
REASON_PUBLIC = "public"
REASON_WHITELISTED = "whitelisted"
REASON_UNAUTHORIZED = "Unauthorized"
REASON_PERMISSION_DENIED = "PermissionDenied"


@dataclass(frozen=True)
class Identity:
    user_id: str
    email: Optional[str] = None


@dataclass(frozen=True)
class AccessDecision:
    allow: bool
    reason: str

    def raise_for_denial(self) -> None:
        if self.allow:
            return
        if self.reason == REASON_UNAUTHORIZED:
            raise Unauthorized()
        raise PermissionDenied()


def _visibility_column(model):
    return getattr(model, "visibility", None)


def list_predicate(model, identity: Optional[Identity]):
    """SQL clause restricting ``model`` rows to those ``identity`` may list."""
    visibility = _visibility_column(model)
    clauses = []
    if identity is not None:
        clauses.append(model.user_id == identity.user_id)
    if visibility is not None:
        clauses.append(visibility == VISIBILITY_PUBLIC)
    if not clauses:
        return false()
    return or_(*clauses)


def direct_access_decision(
    identity: Optional[Identity],
    row,
    is_whitelisted: Optional[Callable[[str], bool]] = None,
) -> AccessDecision:
    """Decide whether ``identity`` may fetch ``row`` by id.

    ``is_whitelisted`` receives the caller's email and is only invoked for
    private rows the caller does not own.
    """
    if identity is not None and row.user_id == identity.user_id:
        return AccessDecision(True, REASON_OWNER)

    visibility = getattr(row, "visibility", None)
    if visibility == VISIBILITY_PUBLIC:
        return AccessDecision(True, REASON_PUBLIC)

    if identity is None:
        return AccessDecision(False, REASON_UNAUTHORIZED)

    # Whitelists only exist for rows carrying a visibility flag
    if visibility is not None and identity.email and is_whitelisted is not None:
        if is_whitelisted(identity.email):
            return AccessDecision(True, REASON_WHITELISTED)

    return AccessDecision(False, REASON_PERMISSION_DENIED)


def require_owner(identity: Optional[Identity], row) -> None:
    if identity is None:
        raise Unauthorized()
    if row.user_id != identity.user_id:
        raise PermissionDenied()
