"""Users service: CRUD over `users_schema.users`."""
