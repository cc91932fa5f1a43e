"""
Pet Store - In-memory pets, selection, statistics and catalogs.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from pettime_client.domain.errors import InputValidationError, describe_failure
from pettime_client.domain.pet import (
    CreatePetRequest,
    GameType,
    Pet,
    PetStats,
    PetType,
    UpdatePetRequest,
)
from pettime_client.ports.gateway_port import ApiGatewayPort
from pettime_client.store.observable import ObservableStore

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 100


@dataclass(frozen=True)
class PetState:
    pets: Tuple[Pet, ...] = ()
    selected_pet: Optional[Pet] = None
    pet_types: Tuple[PetType, ...] = ()
    game_types: Tuple[GameType, ...] = ()
    stats: Optional[PetStats] = None
    is_loading: bool = False
    error: Optional[str] = None


class PetStore(ObservableStore[PetState]):
    """
    Owns the user's pets and keeps them consistent with the API.

    Domain rules:
    - pets are matched by id, never by position
    - at most one pet is selected; changing the selection drops stats
    - stats fetched for a selection that is no longer current are discarded
    - the server is authoritative: update/delete always hit the API, even
      for ids not held locally

    Every gateway-backed operation commits is_loading=True with the error
    cleared, then commits its outcome with is_loading=False. Failures are
    written to state.error and re-raised.
    """

    def __init__(self, gateway: ApiGatewayPort):
        """
        Initialize pet store.

        Args:
            gateway: Remote API
        """
        super().__init__(PetState())
        self._gateway = gateway
        self._selection_generation = 0

    def get_pet(self, pet_id: str) -> Optional[Pet]:
        """Look up a locally held pet by id."""
        for pet in self._state.pets:
            if pet.id == pet_id:
                return pet
        return None

    async def fetch_pets(self) -> Tuple[Pet, ...]:
        """
        Replace the local collection with the server's list.

        Raises:
            GatewayError: If the list cannot be fetched
        """
        self._begin()
        try:
            pets = tuple(await self._gateway.list_pets())
        except Exception as exc:
            self._settle(error=describe_failure(exc, "Failed to fetch pets"))
            raise
        self._settle(pets=pets)
        return pets

    async def fetch_pet(self, pet_id: str) -> Pet:
        """
        Refresh one pet from the server.

        Replaces the local copy (and the selection, if it is that pet), or
        appends the pet when it is not held locally.

        Raises:
            NotFoundError: If the pet does not exist
        """
        self._begin()
        try:
            pet = await self._gateway.get_pet(pet_id)
        except Exception as exc:
            self._settle(error=describe_failure(exc, "Failed to fetch pet"))
            raise

        pets = self._state.pets
        if any(p.id == pet.id for p in pets):
            pets = tuple(pet if p.id == pet.id else p for p in pets)
        else:
            pets = pets + (pet,)
        self._settle(pets=pets, selected_pet=self._replaced_selection(pet))
        return pet

    async def fetch_pet_types(self) -> Tuple[PetType, ...]:
        """
        Load the pet type catalog.

        Does not touch is_loading and does not raise: a failure only sets
        state.error and leaves the previous catalog in place.
        """
        try:
            pet_types = tuple(await self._gateway.list_pet_types())
        except Exception as exc:
            logger.warning("Could not load pet types: %s", exc)
            self._commit(error=describe_failure(exc, "Failed to fetch pet types"))
            return self._state.pet_types
        self._commit(pet_types=pet_types)
        return pet_types

    async def fetch_game_types(self) -> Tuple[GameType, ...]:
        """Load the game type catalog. Same failure policy as fetch_pet_types."""
        try:
            game_types = tuple(await self._gateway.list_game_types())
        except Exception as exc:
            logger.warning("Could not load game types: %s", exc)
            self._commit(error=describe_failure(exc, "Failed to fetch game types"))
            return self._state.game_types
        self._commit(game_types=game_types)
        return game_types

    async def fetch_pet_stats(self, pet_id: str) -> Optional[PetStats]:
        """
        Fetch derived statistics for a pet.

        The response is only committed if the selection has not changed
        since the request was issued.

        Returns:
            The committed stats, None if the response was stale

        Raises:
            GatewayError: If the stats cannot be fetched
        """
        generation = self._selection_generation
        self._begin()
        try:
            stats = await self._gateway.get_pet_stats(pet_id)
        except Exception as exc:
            if generation != self._selection_generation:
                self._settle()
            else:
                self._settle(error=describe_failure(exc, "Failed to fetch stats"))
            raise

        if generation != self._selection_generation:
            logger.debug("Discarding stale stats for pet %s", pet_id)
            self._settle()
            return None

        self._settle(stats=stats)
        return stats

    def select_pet(self, pet: Optional[Pet]) -> None:
        """Select a pet (or none). Always clears stats."""
        self._selection_generation += 1
        self._commit(selected_pet=pet, stats=None)

    async def create_pet(self, request: CreatePetRequest) -> Pet:
        """
        Create a pet, append it and select it.

        Returns:
            The created pet, with its server-assigned id

        Raises:
            InputValidationError: If pet_type_id or name is missing
            GatewayError: If the API rejects the pet
        """
        if not request.pet_type_id:
            self._reject("Pet type is required")
        self._check_name(request.name)

        self._begin()
        try:
            pet = await self._gateway.create_pet(request)
        except Exception as exc:
            self._settle(error=describe_failure(exc, "Failed to create pet"))
            raise

        self._selection_generation += 1
        self._settle(pets=self._state.pets + (pet,), selected_pet=pet, stats=None)
        return pet

    async def update_pet(self, pet_id: str, request: UpdatePetRequest) -> Pet:
        """
        Update a pet and swap the server's copy in by id.

        Raises:
            InputValidationError: If a name is given but blank
            NotFoundError: If the pet does not exist
        """
        if request.name is not None:
            self._check_name(request.name)

        self._begin()
        try:
            updated = await self._gateway.update_pet(pet_id, request)
        except Exception as exc:
            self._settle(error=describe_failure(exc, "Failed to update pet"))
            raise

        self._settle(
            pets=tuple(updated if p.id == pet_id else p for p in self._state.pets),
            selected_pet=self._replaced_selection(updated, pet_id),
        )
        return updated

    async def delete_pet(self, pet_id: str) -> None:
        """
        Delete a pet. Deselects it (and drops stats) if it was selected.

        Raises:
            NotFoundError: If the pet does not exist
        """
        self._begin()
        try:
            await self._gateway.delete_pet(pet_id)
        except Exception as exc:
            self._settle(error=describe_failure(exc, "Failed to delete pet"))
            raise

        changes = {"pets": tuple(p for p in self._state.pets if p.id != pet_id)}
        selected = self._state.selected_pet
        if selected is not None and selected.id == pet_id:
            self._selection_generation += 1
            changes.update(selected_pet=None, stats=None)
        self._settle(**changes)

    def clear_error(self) -> None:
        self._commit(error=None)

    def reset(self) -> None:
        """Drop everything held for the previous user. Subscribers are kept."""
        self._selection_generation += 1
        self._commit(
            pets=(), selected_pet=None, pet_types=(), game_types=(), stats=None, error=None
        )

    def _replaced_selection(self, pet: Pet, pet_id: Optional[str] = None) -> Optional[Pet]:
        selected = self._state.selected_pet
        if selected is not None and selected.id == (pet_id or pet.id):
            return pet
        return selected

    def _check_name(self, name: str) -> None:
        if not name or not name.strip():
            self._reject("Pet name is required")
        if len(name) > MAX_NAME_LENGTH:
            self._reject(f"Pet name must be at most {MAX_NAME_LENGTH} characters")

    def _reject(self, message: str) -> None:
        self._commit(error=message)
        raise InputValidationError(message)
