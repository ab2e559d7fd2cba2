import secrets
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerifyMismatchError

ph = PasswordHasher(time_cost=3, memory_cost=65536, parallelism=4)


def generate_manage_token() -> str:
    return secrets.token_hex(24)


def generate_slug_suffix() -> str:
    return secrets.token_hex(3)


def hash_manage_token(token: str) -> str:
    return ph.hash(token)


def verify_manage_token(stored_hash: str, token: str) -> bool:
    try:
        return ph.verify(stored_hash, token)
    except (VerifyMismatchError, InvalidHashError):
        return False
