"""Business modules for the items service.

Each module is self-contained with its own schemas, repository,
routes and domain logic.
"""
