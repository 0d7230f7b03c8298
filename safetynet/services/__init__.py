"""Business services (CRUD mutators, data loading)."""
