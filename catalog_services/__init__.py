"""
Users and products catalog services.
Two small FastAPI services share the plumbing in `common` and `api`; each service package
owns its entity router, data access, and app entrypoint.
"""
