"""FindMyGym application package."""

__all__ = []
