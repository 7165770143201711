"""City directory and weather clients with in-memory caching."""
