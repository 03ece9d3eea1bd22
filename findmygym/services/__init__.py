"""Use cases sitting between the HTTP routers and the repositories."""
