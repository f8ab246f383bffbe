"""
chirpy.auth.models

Auth domain models.

Responsibilities:
- Define the authenticated identity type (`Principal`) injected into endpoints.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Principal:
    """
    Authenticated caller identity, taken from the `sub` claim of a valid token.
    """

    user_id: uuid.UUID


# --- Module Notes -----------------------------------------------------------
# Keep this model minimal; it is used across API and service boundaries.
