"""Service layer — use cases returning ServiceResult.

Services may import from domain, patch and infrastructure.
They must never import from commands or output.
"""
