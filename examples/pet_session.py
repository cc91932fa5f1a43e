"""
Pet Session Example - Log in, manage pets, log out against a running API.

    PETTIME_API_URL=http://localhost:8080/api/v1 python examples/pet_session.py
"""

import asyncio
import logging
import os

from pettime_client import ClientConfig, PetTimeClient
from pettime_client.domain import CreatePetRequest, LoginRequest, UpdatePetRequest


def render(state):
    names = ", ".join(p.name for p in state.pets) or "-"
    print(f"  [pets] loading={state.is_loading} pets={names} error={state.error}")


async def main():
    logging.basicConfig(level=logging.INFO)

    async with PetTimeClient.from_config(ClientConfig.from_env()) as client:
        unsubscribe = client.pets.subscribe(render)

        await client.start()
        if not client.session.state.is_authenticated:
            await client.session.login(LoginRequest(
                email=os.environ.get("PETTIME_EMAIL", "alice@example.com"),
                password=os.environ.get("PETTIME_PASSWORD", "password123"),
            ))
        print(f"Logged in as {client.session.state.user.name}")

        await client.pets.fetch_pet_types()
        pet_type = client.pets.state.pet_types[0].id if client.pets.state.pet_types else "dog"

        pet = await client.pets.create_pet(CreatePetRequest(pet_type_id=pet_type, name="Rex"))
        print(f"Created {pet.name} (level {pet.level}, {pet.xp_to_next_level} XP to next level)")

        stats = await client.pets.fetch_pet_stats(pet.id)
        if stats:
            print(f"Activities so far: {stats.total_activities}")

        await client.pets.update_pet(pet.id, UpdatePetRequest(breed="Beagle"))
        await client.pets.delete_pet(pet.id)

        unsubscribe()
        await client.logout()
        print(f"Authenticated after logout: {client.session.state.is_authenticated}")


if __name__ == "__main__":
    asyncio.run(main())
