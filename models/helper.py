import secrets
import string
from typing import Callable

ALPHABET = string.ascii_lowercase + string.digits


def id_generator(prefix: str, length: int) -> Callable[[], str]:
    """Return a factory producing ids like ``<prefix>_<random chars>``."""

    def generate() -> str:
        suffix = "".join(secrets.choice(ALPHABET) for _ in range(length))
        return f"{prefix}_{suffix}"

    return generate
