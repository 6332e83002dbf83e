"""Products service: CRUD over `products_schema.products` plus the users-count composition."""
