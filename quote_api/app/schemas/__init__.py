"""
Pydantic schema definitions for API payloads.

Schemas are kept separate from the domain models in ``models`` so the
API representation can evolve independently of storage.
"""
