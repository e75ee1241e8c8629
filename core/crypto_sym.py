# --------------------------------------------------------------
# File: crypto_sym.py
# Description: Primitivas AES-GCM para cifrado y descifrado simétrico seguro.
# --------------------------------------------------------------
"""Rutinas de cifrado simétrico para proteger el mnemónico."""

import os
from typing import Optional, Union

from cryptography.hazmat.primitives.ciphers.aead import AESGCM

NONCE_LENGTH = 12
TAG_LENGTH = 16

KeyBuffer = Union[bytes, bytearray]


def random_bytes(length: int) -> bytearray:
    """Genera bytes aleatorios criptográficamente seguros en un buffer mutable.

    Args:
        length (int): Número de bytes a generar.

    Returns:
        bytearray: Buffer con bytes de `os.urandom`.

    """

    return bytearray(os.urandom(length))


def aes_gcm_encrypt_with_key(
    key: KeyBuffer, nonce: bytes, plaintext: bytes, aad: Optional[bytes] = None
) -> bytes:
    """Cifra datos con AES-GCM utilizando una clave y un nonce proporcionados.

    Args:
        key (KeyBuffer): Clave simétrica de 256 bits.
        nonce (bytes): Vector de inicialización de 96 bits, único por clave.
        plaintext (bytes): Datos a cifrar.
        aad (Optional[bytes]): Datos autenticados adicionales.

    Returns:
        bytes: Ciphertext con la etiqueta de 128 bits concatenada al final.

    """

    aes = AESGCM(key)
    return aes.encrypt(bytes(nonce), bytes(plaintext), aad)


def aes_gcm_decrypt_with_key(
    key: KeyBuffer, nonce: bytes, ciphertext: bytes, aad: Optional[bytes] = None
) -> bytes:
    """Descifra datos con AES-GCM verificando la etiqueta final.

    Args:
        key (KeyBuffer): Clave simétrica que protege los datos.
        nonce (bytes): Vector de inicialización de 96 bits.
        ciphertext (bytes): Datos cifrados con la etiqueta al final.
        aad (Optional[bytes]): Datos autenticados adicionales.

    Returns:
        bytes: Mensaje original en claro.

    Raises:
        cryptography.exceptions.InvalidTag: Si la etiqueta no verifica.

    """

    aes = AESGCM(key)
    return aes.decrypt(bytes(nonce), bytes(ciphertext), aad)
