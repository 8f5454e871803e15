from .account import Account, AuthSession, MagicLink, AdminUser
from .profile import Profile, PROFILE_STATUSES
from .endorsement import Endorsement
from .contact import ContactMessage

__all__ = [
    "Account",
    "AuthSession",
    "MagicLink",
    "AdminUser",
    "Profile",
    "PROFILE_STATUSES",
    "Endorsement",
    "ContactMessage",
]
