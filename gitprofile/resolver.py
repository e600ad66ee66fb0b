from __future__ import annotations

import logging

from .git_identity import GitIdentity
from .models import Profile
from .storage import ProfileStore

logger = logging.getLogger("gitprofile.resolver")


def active_profile(store: ProfileStore, identity: GitIdentity) -> Profile | None:
    """Profile whose email matches git's configured user.email, if any."""
    email = identity.get_email()
    if not email:
        return None
    return store.find_by_email(email)


def resolve_default(store: ProfileStore, identity: GitIdentity) -> Profile | None:
    """Best guess when no profile is named: the active one, else the first loaded."""
    profile = active_profile(store, identity)
    if profile is not None:
        return profile
    if store.profiles:
        logger.debug("No profile matches git's user.email, falling back to %s", store.profiles[0].name)
        return store.profiles[0]
    return None


def resolve(store: ProfileStore, identity: GitIdentity, name: str | None = None) -> Profile | None:
    # An explicit name never falls back to the default.
    if name is not None:
        return store.find_by_name(name)
    return resolve_default(store, identity)
