"""
Version 1 of the API.

This subpackage bundles the matérias, professores, aulas and trocas
endpoints.  Breaking changes should go into a new version subpackage
(e.g. ``v2``).
"""
