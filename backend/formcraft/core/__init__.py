"""Core Layer — pure form-definition logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are pure and deterministic (FormBuilder mutates only itself)

Design Decisions:
    - Functional core separated from imperative shell: the manager service
      orchestrates storage calls around these rules
"""
