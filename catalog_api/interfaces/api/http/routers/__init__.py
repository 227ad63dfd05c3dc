"""Sub-routers por bounded context (auth, movies, categories, users, admin)."""
