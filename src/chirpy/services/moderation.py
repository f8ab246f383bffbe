"""
chirpy.services.moderation

Content policy applied to every new chirp.

Responsibilities:
- Enforce the maximum body length.
- Redact denylisted whole words.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from chirpy.errors import InputError

MAX_CHIRP_LENGTH = 140
PROFANE_WORDS = frozenset({"kerfuffle", "sharbert", "fornax"})
REDACTION_PLACEHOLDER = "****"


class ChirpTooLongError(InputError):
    default_public_message = "Chirp is too long"


@dataclass(frozen=True, slots=True)
class ContentPolicy:
    max_length: int = MAX_CHIRP_LENGTH
    denylist: frozenset[str] = field(default=PROFANE_WORDS)
    placeholder: str = REDACTION_PLACEHOLDER

    def check_length(self, body: str) -> None:
        if len(body) > self.max_length:
            raise ChirpTooLongError(
                f"chirp body is {len(body)} characters, limit {self.max_length}"
            )

    def redact(self, body: str) -> str:
        """
        Replace denylisted words with the placeholder.

        Words are split on single spaces and matched case-insensitively as whole
        tokens, so "Sharbert!" or "kerfuffle," pass through untouched.
        """

        return " ".join(
            self.placeholder if word.lower() in self.denylist else word
            for word in body.split(" ")
        )
