"""Generate a local development RSA key pair for JWT signing/verification."""

from __future__ import annotations

import sys
from pathlib import Path

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

KEYS_DIR = Path(__file__).resolve().parent.parent / "keys"
PRIVATE_KEY_NAME = "dev.private.pem"
PUBLIC_KEY_NAME = "dev.public.pem"


def generate_key_pair(key_size: int = 2048) -> tuple[str, str]:
    """Generate an in-memory RSA private/public key pair as PEM strings."""
    private_key = rsa.generate_private_key(public_exponent=65537, key_size=key_size)
    private_pem = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("utf-8")
    public_pem = private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode("utf-8")
    return private_pem, public_pem


def write_key_pair(keys_dir: Path = KEYS_DIR) -> tuple[Path, Path] | None:
    """
    Write a key pair into *keys_dir* unless one is already there.

    Returns:
        The private and public key paths when new files were written, or
        ``None`` when both files already existed.

    Raises:
        SystemExit: If only one of the two key files exists.
    """
    private_path = keys_dir / PRIVATE_KEY_NAME
    public_path = keys_dir / PUBLIC_KEY_NAME
    private_exists = private_path.exists()
    public_exists = public_path.exists()

    if private_exists and public_exists:
        return None

    if private_exists != public_exists:
        raise SystemExit(
            "Only one key file exists. Remove both key files and run this script again."
        )

    keys_dir.mkdir(parents=True, exist_ok=True)
    private_pem, public_pem = generate_key_pair()
    private_path.write_text(private_pem, encoding="utf-8")
    public_path.write_text(public_pem, encoding="utf-8")
    return private_path, public_path


def main(argv: list[str] | None = None) -> int:
    """Generate keys once and skip when both files already exist."""
    args = sys.argv[1:] if argv is None else argv
    keys_dir = Path(args[0]) if args else KEYS_DIR

    written = write_key_pair(keys_dir)
    if written is None:
        print(
            f"Keys already exist, skipping: {keys_dir / PRIVATE_KEY_NAME} / "
            f"{keys_dir / PUBLIC_KEY_NAME}"
        )
        return 0

    for path in written:
        print(f"Generated: {path}")
    print(
        f"Export JWT_PRIVATE_KEY_PATH={written[0]} and JWT_PUBLIC_KEY_PATH={written[1]}"
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
