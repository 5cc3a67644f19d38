"""
Pydantic schema definitions for API payloads.

Each resource (matérias, professores, aulas, trocas) defines its own
request and response models.  Schemas are separated from the stored
records, which are plain dictionaries owned by the record store.
"""
