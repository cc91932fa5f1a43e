"""
Stores - Observable client-side state synchronised with the API.
"""

from pettime_client.store.observable import ObservableStore
from pettime_client.store.session_store import SessionState, SessionStore
from pettime_client.store.pet_store import PetState, PetStore

__all__ = [
    "ObservableStore",
    "SessionState",
    "SessionStore",
    "PetState",
    "PetStore",
]
