"""Core Layer: domain errors, id generation, grouping and store contracts.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - No IO: the store is reached only through repository_protocols.py
"""
