# authvault/adapters/outbound/security/hash_admin_password.py

"""
Generates the bcrypt hash expected in ADMIN_PASSWORD_HASH.

Usage:
    python -m authvault.adapters.outbound.security.hash_admin_password
"""

import getpass

from authvault.adapters.outbound.security.secret_hasher import SecretHasher


def main() -> None:
    print("AuthVault administrative password hash generator")
    password = getpass.getpass("Enter the administrative password: ")
    confirmation = getpass.getpass("Repeat the password: ")

    if not password or password != confirmation:
        raise SystemExit("Passwords are empty or do not match")

    print("\nSet this value as ADMIN_PASSWORD_HASH:\n")
    print(SecretHasher.generate_hash(password))


if __name__ == "__main__":
    main()
