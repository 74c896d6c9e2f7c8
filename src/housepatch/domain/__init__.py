"""Domain layer — aggregate models, ids, and the patchable projection.

This layer depends only on stdlib and pydantic.
It must never import from patch, services, infrastructure, or commands.
"""
