"""Infrastructure helpers (unit of work, adapters)."""
