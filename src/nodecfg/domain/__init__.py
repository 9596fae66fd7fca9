"""Domain layer — value kinds, schemas, typed models and validation rules.

This layer depends only on stdlib, pydantic and the address codecs.
It must never import from services, infrastructure, commands, or config.
"""
