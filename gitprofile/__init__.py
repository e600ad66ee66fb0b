"""git-profile: named git identity profiles."""

from .models import Profile
from .storage import ProfileStore

__version__ = "0.1.0"

__all__ = [
    "Profile",
    "ProfileStore",
    "__version__",
]
