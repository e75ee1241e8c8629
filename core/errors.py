# --------------------------------------------------------------
# File: errors.py
# Description: Jerarquía de excepciones del cifrador de mnemónicos.
# --------------------------------------------------------------
"""Errores tipados que el núcleo criptográfico devuelve a sus llamantes."""


class MnemonicCipherError(Exception):
    """Base común de todos los errores del paquete."""


class CryptoOperationError(MnemonicCipherError):
    """Fallo de las primitivas durante el cifrado."""

    def __init__(self, message: str = "encryption failed") -> None:
        super().__init__(message)


class FormatError(MnemonicCipherError):
    """El payload no tiene la forma de un EncryptedPayload."""


class UnsupportedFormatError(MnemonicCipherError):
    """Versión o algoritmo del payload no soportados."""


class DecryptionFailedError(MnemonicCipherError):
    """Fallo genérico de descifrado.

    Cubre tanto una passphrase incorrecta como datos alterados; ambos casos
    se presentan igual al llamante.
    """

    def __init__(self, message: str = "decryption failed") -> None:
        super().__init__(message)


class InputValidationError(MnemonicCipherError):
    """Entrada de usuario rechazada por la capa de servicios."""
