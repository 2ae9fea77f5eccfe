"""
Pydantic schema definitions for API payloads.

Request models carry the declarative validation rules; response models
describe what goes into the ``data`` field of the standard envelope.
Schemas are kept apart from the entity records in ``models``.
"""
