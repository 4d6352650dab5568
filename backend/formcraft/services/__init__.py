"""Services Layer — orchestration of core rules around storage IO.

Invariants:
    - Services never import from api/
    - Storage reached only through core/repository_protocols.py contracts
"""
