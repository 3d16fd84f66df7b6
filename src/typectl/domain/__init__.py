"""Domain layer — type aggregates, standard property stubs, reconciliation.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
