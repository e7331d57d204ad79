"""Id Generator: random 32-hex-character identifiers for new property records.

Invariants:
    - Always 32 lowercase hex characters (16 random bytes)
    - Not guaranteed unique: the store's primary key enforces uniqueness

Design Decisions:
    - secrets over random/uuid4: draws from the OS CSPRNG, no version nibble
"""

import secrets

PROPERTY_ID_BYTES = 16


def generate_id() -> str:
    """Return a fresh random property id."""
    return secrets.token_hex(PROPERTY_ID_BYTES)
