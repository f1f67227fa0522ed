from app.models.user import User
from app.models.travel import Travel

__all__ = [
    "Travel",
    "User",
]
