# --------------------------------------------------------------
# File: services.py
# Description: Servicios de cifrado y descifrado de mnemónicos para la UI.
# --------------------------------------------------------------
"""Capa de servicios: valida la entrada, invoca al cifrador y traduce errores."""

import asyncio
import json
import logging
from typing import Any, Dict, Optional, Tuple

from core.errors import (
    CryptoOperationError,
    DecryptionFailedError,
    FormatError,
    InputValidationError,
    UnsupportedFormatError,
)
from core.i18n import t
from core.mnemonic_cipher import MnemonicCipher
from core.models import ALGORITHM, FORMAT_VERSION, PayloadInfo

logger = logging.getLogger(__name__)

MIN_WORDS = 12
MAX_WORDS = 24
REQUIRED_FIELDS = ("version", "algorithm", "salt", "iv", "ciphertext")

OperationResult = Tuple[bool, str, Optional[str], str]


def _parse_json_object(text: str) -> Optional[Dict[str, Any]]:
    """Devuelve el objeto JSON o `None` si el texto no lo es."""

    try:
        data = json.loads(text)
    except (TypeError, ValueError):
        return None
    return data if isinstance(data, dict) else None


def validate_encrypt_input(mnemonic: str, password: str, *, locale: Optional[str] = None) -> None:
    """Comprueba que el mnemónico y la passphrase sean utilizables.

    Args:
        mnemonic (str): Frase mnemónica introducida por el usuario.
        password (str): Passphrase de cifrado.
        locale (Optional[str]): Idioma de los mensajes.

    Raises:
        InputValidationError: Campos vacíos o número de palabras fuera de 12-24.

    """

    if not mnemonic or not mnemonic.strip():
        raise InputValidationError(t("msg_need_mnemonic", locale))
    if not password or not password.strip():
        raise InputValidationError(t("msg_need_encrypt_password", locale))

    words = mnemonic.split()
    if not MIN_WORDS <= len(words) <= MAX_WORDS:
        raise InputValidationError(
            t("msg_mnemonic_length_invalid", locale, min=MIN_WORDS, max=MAX_WORDS)
        )


def validate_decrypt_input(payload_text: str, password: str, *, locale: Optional[str] = None) -> None:
    """Comprueba que haya texto cifrado con apariencia de payload y passphrase."""

    if not payload_text or not payload_text.strip():
        raise InputValidationError(t("msg_need_encrypted", locale))
    if not password or not password.strip():
        raise InputValidationError(t("msg_need_decrypt_password", locale))

    data = _parse_json_object(payload_text)
    if data is None or not all(data.get(field) for field in ("version", "algorithm", "ciphertext")):
        raise InputValidationError(t("msg_invalid_format", locale))


def check_payload_integrity(payload_text: str) -> bool:
    """Indica si el texto tiene todos los campos y una versión/algoritmo soportados."""

    data = _parse_json_object(payload_text)
    if data is None or any(field not in data for field in REQUIRED_FIELDS):
        return False
    return data["version"] == FORMAT_VERSION and data["algorithm"] == ALGORITHM


def describe_payload(payload_text: str) -> Optional[PayloadInfo]:
    """Resumen no sensible del payload, o `None` si no es JSON."""

    data = _parse_json_object(payload_text)
    if data is None:
        return None
    ciphertext = data.get("ciphertext")
    return PayloadInfo(
        version=data.get("version"),
        algorithm=data.get("algorithm"),
        iterations=data.get("iterations"),
        data_size=len(ciphertext) if isinstance(ciphertext, list) else 0,
    )


def encrypt_operation(
    mnemonic: str,
    password: str,
    *,
    allow_weak: bool = False,
    locale: Optional[str] = None,
) -> OperationResult:
    """Valida y cifra el mnemónico.

    Args:
        mnemonic (str): Frase mnemónica en claro.
        password (str): Passphrase de cifrado.
        allow_weak (bool): Continuar aunque la passphrase sea débil.
        locale (Optional[str]): Idioma de los mensajes.

    Returns:
        OperationResult: Indicador de éxito, mensaje para la interfaz, payload
        serializado (o `None`) y traza de depuración.

    """

    try:
        validate_encrypt_input(mnemonic, password, locale=locale)
    except InputValidationError as exc:
        return False, str(exc), None, "[ENCRYPT] entrada rechazada"

    cipher = MnemonicCipher(locale=locale)
    strength = cipher.evaluate_password_strength(password)
    if not strength.is_strong and not allow_weak:
        msg = t("msg_weak_password_confirm", locale, feedback=strength.feedback)
        return False, msg, None, f"[POLICY] score={strength.score:.2f} level={strength.level}"

    try:
        payload = cipher.encrypt_sync(mnemonic.strip(), password)
    except CryptoOperationError:
        return False, t("msg_encrypt_failed", locale), None, "[ENCRYPT] error criptográfico"

    debug = (
        f"[ENCRYPT] PBKDF2-SHA256 it={cipher.iterations} salt={cipher.salt_length * 8}-bit\n"
        f"[ENCRYPT] AES-GCM-256 nonce={cipher.iv_length * 8}-bit tag=128-bit"
    )
    logger.info("Mnemónico cifrado (%d palabras)", len(mnemonic.split()))
    return True, t("msg_encrypt_success", locale), payload, debug


def decrypt_operation(
    payload_text: str, password: str, *, locale: Optional[str] = None
) -> OperationResult:
    """Valida y descifra un payload.

    Returns:
        OperationResult: Indicador de éxito, mensaje, mnemónico (o `None`) y
        traza. Una passphrase incorrecta y unos datos alterados producen el
        mismo mensaje.

    """

    try:
        validate_decrypt_input(payload_text, password, locale=locale)
    except InputValidationError as exc:
        return False, str(exc), None, "[DECRYPT] entrada rechazada"

    cipher = MnemonicCipher(locale=locale)
    try:
        mnemonic = cipher.decrypt_sync(payload_text.strip(), password)
    except FormatError:
        return False, t("msg_invalid_format", locale), None, "[DECRYPT] formato inválido"
    except UnsupportedFormatError:
        return False, t("msg_unsupported_format", locale), None, "[DECRYPT] formato no soportado"
    except DecryptionFailedError:
        return False, t("msg_decrypt_failed", locale), None, "[DECRYPT] fallo de autenticación"

    info = describe_payload(payload_text)
    debug = f"[DECRYPT] {info.algorithm} v{info.version} it={info.iterations} ct_len={info.data_size}"
    logger.info("Mnemónico descifrado")
    return True, t("msg_decrypt_success", locale), mnemonic, debug


async def encrypt_operation_async(
    mnemonic: str,
    password: str,
    *,
    allow_weak: bool = False,
    locale: Optional[str] = None,
) -> OperationResult:
    """Igual que `encrypt_operation` sin bloquear el bucle de eventos."""

    return await asyncio.to_thread(
        encrypt_operation, mnemonic, password, allow_weak=allow_weak, locale=locale
    )


async def decrypt_operation_async(
    payload_text: str, password: str, *, locale: Optional[str] = None
) -> OperationResult:
    """Igual que `decrypt_operation` sin bloquear el bucle de eventos."""

    return await asyncio.to_thread(decrypt_operation, payload_text, password, locale=locale)
