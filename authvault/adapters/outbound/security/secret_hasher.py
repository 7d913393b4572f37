# authvault/adapters/outbound/security/secret_hasher.py

from passlib.context import CryptContext

from authvault.adapters.configuration.config import settings

crypt_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


class SecretHasher:
    """
    bcrypt hashing for client secrets and the administrative password.
    """

    @classmethod
    def generate_hash(cls, secret: str) -> str:
        """
        Generate a secure hash for storage.
        """
        return crypt_context.hash(secret)

    @classmethod
    async def hash_secret(cls, secret: str) -> str:
        return cls.generate_hash(secret)

    @classmethod
    async def verify_secret(cls, plain_secret: str, hashed_secret: str) -> bool:
        """
        Compare a plain text secret with a stored hash.
        """
        return crypt_context.verify(plain_secret, hashed_secret)

    @classmethod
    async def dummy_verify(cls) -> None:
        """
        Spend the same time as a real verification, used when the
        client id is unknown so both failures look alike.
        """
        crypt_context.dummy_verify()
