# fitgam/credentials.py
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash


class CredentialVerifier:
    """
    Turns passwords into stored hashes and checks them back.
    Swap the implementation without touching signup/login.
    """

    def hash(self, password: str) -> str:
        raise NotImplementedError

    def verify(self, stored_hash: Optional[str], password: str) -> bool:
        raise NotImplementedError


class WerkzeugCredentialVerifier(CredentialVerifier):
    def hash(self, password: str) -> str:
        return generate_password_hash(password)

    def verify(self, stored_hash: Optional[str], password: str) -> bool:
        if not stored_hash:
            return False
        return check_password_hash(stored_hash, password)
