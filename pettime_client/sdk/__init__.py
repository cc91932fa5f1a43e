from pettime_client.sdk.client import PetTimeClient

__all__ = ["PetTimeClient"]
