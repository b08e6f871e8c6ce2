"""Random identifiers for public survey links."""

import secrets
import string

ALPHABET = string.digits + string.ascii_lowercase  # base 36
TOKEN_LENGTH = 8


def random_token(length=TOKEN_LENGTH):
    """
    Return a random base-36 token.

    Uniqueness is not checked here; the unique constraint on Result.url
    rejects the insert if two tokens ever collide.
    """
    return ''.join(secrets.choice(ALPHABET) for _ in range(length))
