# --------------------------------------------------------------
# File: crypto_kdf.py
# Description: Derivación de claves simétricas mediante PBKDF2-HMAC-SHA256.
# --------------------------------------------------------------
"""Funciones de derivación de claves para proteger el mnemónico del usuario."""

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from core.secure_memory import wipe

PBKDF2_ITERATIONS = 100_000
KEY_LENGTH = 32


def derive_key(
    passphrase: str,
    salt: bytes,
    *,
    iterations: int = PBKDF2_ITERATIONS,
    outlen: int = KEY_LENGTH,
) -> bytearray:
    """Deriva una clave AES-256 a partir de la passphrase usando PBKDF2-SHA256.

    Args:
        passphrase (str): Passphrase de entrada del usuario.
        salt (bytes): Salt aleatoria asociada al payload.
        iterations (int): Iteraciones PBKDF2.
        outlen (int): Longitud en bytes de la clave resultante.

    Returns:
        bytearray: Clave derivada en un buffer mutable que el llamante debe borrar.

    Raises:
        ValueError: Si la passphrase está vacía o los parámetros no son válidos.

    """

    if not passphrase:
        raise ValueError("passphrase vacía")
    if iterations <= 0:
        raise ValueError("iterations debe ser positivo")

    secret = bytearray(passphrase.encode("utf-8"))
    try:
        kdf = PBKDF2HMAC(
            algorithm=hashes.SHA256(),
            length=outlen,
            salt=bytes(salt),
            iterations=iterations,
        )
        return bytearray(kdf.derive(bytes(secret)))
    finally:
        wipe(secret)
