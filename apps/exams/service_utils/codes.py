"""Short access codes students type to enter an exam."""

from __future__ import annotations

from typing import Iterable

from django.conf import settings
from django.utils.crypto import get_random_string

from ..exceptions import Conflict


def generate_code(length: int | None = None) -> str:
    """Return one random uppercase alphanumeric code.

    ``get_random_string`` draws from ``secrets``, so codes are not guessable
    from the ones issued before them.
    """

    length = length or settings.EXAM_ACCESS_CODE_LENGTH
    return get_random_string(length, allowed_chars=settings.EXAM_ACCESS_CODE_ALPHABET)


def generate_unique_codes(count: int, *, taken: Iterable[str] = ()) -> list[str]:
    """Return ``count`` distinct codes, none of which appear in ``taken``."""

    used = set(taken)
    max_attempts = settings.EXAM_ACCESS_CODE_MAX_ATTEMPTS
    codes: list[str] = []
    for _ in range(count):
        for _attempt in range(max_attempts):
            code = generate_code()
            if code not in used:
                break
        else:
            raise Conflict(
                f"Could not generate a unique access code after {max_attempts} attempts."
            )
        used.add(code)
        codes.append(code)
    return codes


__all__ = ["generate_code", "generate_unique_codes"]
