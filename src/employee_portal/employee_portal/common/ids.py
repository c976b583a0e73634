from __future__ import annotations

import uuid


def new_id() -> str:
    """Server-generated, client-opaque identifier."""
    return uuid.uuid4().hex
