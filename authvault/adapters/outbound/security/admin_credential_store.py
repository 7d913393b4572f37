# authvault/adapters/outbound/security/admin_credential_store.py

import logging
from typing import Optional

from authvault.adapters.configuration.config import settings
from authvault.adapters.outbound.security.secret_hasher import crypt_context

logger = logging.getLogger(__name__)


class AdminCredentialStore:
    """
    Checks the administrative password that guards client management
    against the configured bcrypt hash.
    """

    @classmethod
    def validate(cls, plain_password: Optional[str]) -> bool:
        hashed_password = settings.ADMIN_PASSWORD_HASH
        if not hashed_password:
            logger.warning("Client administration is disabled: ADMIN_PASSWORD_HASH is not set")
            return False
        if not plain_password:
            return False

        try:
            return crypt_context.verify(plain_password, hashed_password)
        except ValueError:
            logger.error("ADMIN_PASSWORD_HASH is not a valid bcrypt hash")
            return False
