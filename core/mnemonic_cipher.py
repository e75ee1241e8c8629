# --------------------------------------------------------------
# File: mnemonic_cipher.py
# Description: Cifrado y descifrado de frases mnemónicas con PBKDF2 + AES-GCM.
# --------------------------------------------------------------
"""Núcleo criptográfico: convierte un mnemónico en un payload JSON opaco y viceversa.

Cada llamada es independiente: genera salt y nonce nuevos, deriva una clave
de 256 bits con PBKDF2-SHA256 y cifra con AES-256-GCM. No hay estado
compartido entre llamadas, por lo que el cifrador puede usarse desde varios
hilos o tareas a la vez.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

from cryptography.exceptions import InvalidTag

from core.crypto_kdf import KEY_LENGTH, PBKDF2_ITERATIONS, derive_key
from core.crypto_sym import aes_gcm_decrypt_with_key, aes_gcm_encrypt_with_key, random_bytes
from core.errors import CryptoOperationError, DecryptionFailedError, UnsupportedFormatError
from core.models import (
    ALGORITHM,
    FORMAT_VERSION,
    IV_LENGTH,
    SALT_LENGTH,
    EncryptedPayload,
    PasswordStrength,
)
from core.password_policy import evaluate_password_strength as _evaluate_strength
from core.secure_memory import wipe

logger = logging.getLogger(__name__)

# Límite de iteraciones aceptadas al descifrar un payload ajeno.
MAX_ITERATIONS = 10_000_000


class MnemonicCipher:
    """Cifrador sin estado de frases mnemónicas.

    Los métodos `encrypt` y `decrypt` son corrutinas que ejecutan el trabajo
    de CPU (PBKDF2) en un hilo auxiliar; `encrypt_sync` y `decrypt_sync`
    ofrecen la misma operación de forma bloqueante.
    """

    version = FORMAT_VERSION
    algorithm = ALGORITHM
    iterations = PBKDF2_ITERATIONS
    salt_length = SALT_LENGTH
    iv_length = IV_LENGTH
    key_length = KEY_LENGTH

    def __init__(self, *, locale: Optional[str] = None) -> None:
        self.locale = locale

    def encrypt_sync(self, mnemonic: str, password: str) -> str:
        """Cifra el mnemónico y devuelve el payload serializado.

        Args:
            mnemonic (str): Frase mnemónica en claro.
            password (str): Passphrase del usuario (no se valida su robustez).

        Returns:
            str: Payload JSON con salt, iv y ciphertext como arrays de enteros.

        Raises:
            CryptoOperationError: Si la entrada es rechazada o falla una primitiva.

        """

        if not isinstance(mnemonic, str) or not isinstance(password, str):
            raise CryptoOperationError()
        if not mnemonic or not password:
            raise CryptoOperationError()

        salt: Optional[bytearray] = None
        iv: Optional[bytearray] = None
        key: Optional[bytearray] = None
        plaintext: Optional[bytearray] = None
        try:
            salt = random_bytes(self.salt_length)
            iv = random_bytes(self.iv_length)
            plaintext = bytearray(mnemonic.encode("utf-8"))
            key = derive_key(password, salt, iterations=self.iterations, outlen=self.key_length)
            ciphertext = aes_gcm_encrypt_with_key(key, iv, plaintext)
            payload = EncryptedPayload(
                salt=bytes(salt),
                iv=bytes(iv),
                ciphertext=ciphertext,
                version=self.version,
                algorithm=self.algorithm,
                iterations=self.iterations,
            )
            serialized = payload.to_json()
        except Exception as exc:
            logger.warning("[ENCRYPT] fallo en primitiva: %s", type(exc).__name__)
            raise CryptoOperationError() from exc
        finally:
            wipe(salt, iv, key, plaintext)

        logger.debug(
            "[ENCRYPT] PBKDF2-SHA256 it=%d AES-GCM-256 ct_len=%d",
            self.iterations,
            len(ciphertext),
        )
        return serialized

    def decrypt_sync(self, payload: Any, password: str) -> str:
        """Recupera el mnemónico a partir del payload serializado.

        Args:
            payload (Any): Texto JSON producido por `encrypt`.
            password (str): Passphrase usada al cifrar.

        Returns:
            str: Mnemónico en claro.

        Raises:
            FormatError: Si el payload no tiene la forma esperada.
            UnsupportedFormatError: Si versión, algoritmo o iteraciones no se soportan.
            DecryptionFailedError: Passphrase incorrecta o datos alterados, sin distinción.

        """

        try:
            parsed = EncryptedPayload.from_json(payload)
        except UnsupportedFormatError:
            logger.warning("[DECRYPT] formato no soportado")
            raise
        if parsed.iterations > MAX_ITERATIONS:
            logger.warning("[DECRYPT] iteraciones fuera de rango")
            raise UnsupportedFormatError("unsupported key derivation parameters")
        if not isinstance(password, str) or not password:
            raise DecryptionFailedError()

        key: Optional[bytearray] = None
        plaintext: Optional[bytearray] = None
        try:
            key = derive_key(password, parsed.salt, iterations=parsed.iterations, outlen=self.key_length)
            plaintext = bytearray(aes_gcm_decrypt_with_key(key, parsed.iv, parsed.ciphertext))
            mnemonic = plaintext.decode("utf-8")
        except (InvalidTag, UnicodeDecodeError, ValueError):
            logger.warning("[DECRYPT] autenticación fallida")
            raise DecryptionFailedError() from None
        finally:
            wipe(key, plaintext)

        logger.debug("[DECRYPT] PBKDF2-SHA256 it=%d OK", parsed.iterations)
        return mnemonic

    async def encrypt(self, mnemonic: str, password: str) -> str:
        """Versión asíncrona de `encrypt_sync`.

        Si la tarea se cancela, el hilo termina igualmente y borra la clave.
        """

        return await asyncio.to_thread(self.encrypt_sync, mnemonic, password)

    async def decrypt(self, payload: Any, password: str) -> str:
        """Versión asíncrona de `decrypt_sync`."""

        return await asyncio.to_thread(self.decrypt_sync, payload, password)

    def evaluate_password_strength(self, password: Any) -> PasswordStrength:
        """Evalúa la passphrase con el idioma del cifrador; nunca lanza excepciones."""

        return _evaluate_strength(password, locale=self.locale)


_default_cipher = MnemonicCipher()


async def encrypt_mnemonic(mnemonic: str, password: str) -> str:
    """Cifra con el cifrador por defecto.

    Args:
        mnemonic (str): Frase mnemónica en claro.
        password (str): Passphrase del usuario.

    Returns:
        str: Payload JSON serializado.

    """

    return await _default_cipher.encrypt(mnemonic, password)


async def decrypt_mnemonic(payload: Any, password: str) -> str:
    """Descifra con el cifrador por defecto.

    Args:
        payload (Any): Texto JSON producido por `encrypt_mnemonic`.
        password (str): Passphrase usada al cifrar.

    Returns:
        str: Mnemónico en claro.

    """

    return await _default_cipher.decrypt(payload, password)


def evaluate_password_strength(password: Any, *, locale: Optional[str] = None) -> PasswordStrength:
    """Atajo a `core.password_policy.evaluate_password_strength`."""

    return _evaluate_strength(password, locale=locale)
