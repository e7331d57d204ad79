"""Property Desk Application Package: property-management records over HTTP.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
