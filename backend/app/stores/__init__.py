from app.stores.travel_store import TravelStore, travel_store
from app.stores.user_store import UserStore, user_store

__all__ = ["TravelStore", "UserStore", "travel_store", "user_store"]
