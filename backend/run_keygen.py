#!/usr/bin/env python3
"""
Generate the EC P-256 key pair used to sign access tokens.

Usage:
    python run_keygen.py            # Write to JWT_PRIVATE_KEY_PATH / JWT_PUBLIC_KEY_PATH
    python run_keygen.py --force    # Overwrite existing keys
"""

import argparse
import sys
from pathlib import Path

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec
from rich.console import Console

from shared.config import get_settings

console = Console()


def generate_key_pair() -> tuple[bytes, bytes]:
    """Return (private_pem, public_pem) for a fresh P-256 key."""
    private_key = ec.generate_private_key(ec.SECP256R1())
    private_pem = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )
    public_pem = private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    return private_pem, public_pem


def write_key_pair(private_path: Path, public_path: Path, force: bool = False) -> bool:
    """
    Write a new key pair. Returns False without touching anything when
    either file exists and force is not set.
    """
    existing = [p for p in (private_path, public_path) if p.exists()]
    if existing and not force:
        for path in existing:
            console.print(f"[yellow]Exists:[/yellow] {path}")
        return False

    private_pem, public_pem = generate_key_pair()
    for path in (private_path, public_path):
        path.parent.mkdir(parents=True, exist_ok=True)

    private_path.write_bytes(private_pem)
    private_path.chmod(0o600)
    public_path.write_bytes(public_pem)
    return True


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Generate the access token signing keys")
    parser.add_argument("--force", action="store_true", help="Overwrite existing key files")
    args = parser.parse_args(argv)

    settings = get_settings()
    private_path = Path(settings.jwt_private_key_path)
    public_path = Path(settings.jwt_public_key_path)

    if not write_key_pair(private_path, public_path, force=args.force):
        console.print("[red]Refusing to overwrite existing keys.[/red] Re-run with --force.")
        sys.exit(1)

    console.print(f"[green]✓[/green] Private key: {private_path}")
    console.print(f"[green]✓[/green] Public key:  {public_path}")


if __name__ == "__main__":
    main()
