# --------------------------------------------------------------
# File: test_mnemonic_cipher.py
# Description: Pruebas del cifrador de frases mnemónicas (PBKDF2 + AES-GCM).
# --------------------------------------------------------------

import asyncio
import json
import os

import pytest

import core.mnemonic_cipher as mc
from core.crypto_kdf import derive_key
from core.crypto_sym import aes_gcm_encrypt_with_key
from core.errors import (
    CryptoOperationError,
    DecryptionFailedError,
    FormatError,
    MnemonicCipherError,
    UnsupportedFormatError,
)
from core.models import EncryptedPayload
from core.secure_memory import is_wiped
from tests.conftest import MNEMONIC, PASSWORD


def _craft_payload(plaintext: bytes, password: str, *, iterations: int) -> str:
    """Construye un payload a mano con las primitivas de bajo nivel.

    Args:
        plaintext (bytes): Bytes a cifrar tal cual.
        password (str): Passphrase para derivar la clave.
        iterations (int): Iteraciones PBKDF2 registradas en el payload.

    Returns:
        str: Payload serializado.
    """
    salt, iv = os.urandom(16), os.urandom(12)
    key = derive_key(password, salt, iterations=iterations)
    ct = aes_gcm_encrypt_with_key(key, iv, plaintext)
    return EncryptedPayload(
        salt=salt, iv=iv, ciphertext=ct, version="1.0", algorithm="AES-GCM-PBKDF2", iterations=iterations
    ).to_json()


def _forbid_kdf(monkeypatch):
    """Hace fallar la prueba si se llega a derivar una clave."""

    def _boom(*args, **kwargs):
        raise AssertionError("no debería derivarse ninguna clave")

    monkeypatch.setattr(mc, "derive_key", _boom)


def test_roundtrip_scenario(cipher, encrypted_payload):
    """El mnemónico de 12 palabras se recupera idéntico con la misma passphrase."""
    assert cipher.decrypt_sync(encrypted_payload, PASSWORD) == MNEMONIC


def test_wrong_password_fails_generically(cipher, encrypted_payload):
    """Una passphrase incorrecta produce DecryptionFailedError genérico."""
    with pytest.raises(DecryptionFailedError) as info:
        cipher.decrypt_sync(encrypted_payload, "wrong-password")
    assert str(info.value) == "decryption failed"


def test_serialized_shape(encrypted_payload):
    """El payload sigue el formato de intercambio con arrays de enteros."""
    data = json.loads(encrypted_payload)
    assert list(data) == ["salt", "iv", "ciphertext", "version", "algorithm", "iterations"]
    assert data["version"] == "1.0"
    assert data["algorithm"] == "AES-GCM-PBKDF2"
    assert data["iterations"] == 100000
    assert len(data["salt"]) == 16
    assert len(data["iv"]) == 12
    assert len(data["ciphertext"]) == len(MNEMONIC.encode("utf-8")) + 16
    assert all(isinstance(b, int) and 0 <= b <= 255 for b in data["ciphertext"])


def test_encrypt_is_not_deterministic(cipher, encrypted_payload):
    """Dos cifrados iguales generan salt, iv y ciphertext distintos."""
    first = json.loads(encrypted_payload)
    second = json.loads(cipher.encrypt_sync(MNEMONIC, PASSWORD))
    assert first["salt"] != second["salt"]
    assert first["iv"] != second["iv"]
    assert first["ciphertext"] != second["ciphertext"]


@pytest.mark.parametrize("index, bit", [(0, 0), (5, 3), (-17, 7), (-1, 0)])
def test_bit_flip_in_ciphertext_is_detected(cipher, mutate_payload, index, bit):
    """Invertir un bit del ciphertext o del tag hace fallar el descifrado."""

    def _flip(data):
        data["ciphertext"][index] ^= 1 << bit

    tampered = mutate_payload(_flip)
    with pytest.raises(DecryptionFailedError) as info:
        cipher.decrypt_sync(tampered, PASSWORD)
    assert str(info.value) == "decryption failed"


def test_tampered_iv_is_detected(cipher, mutate_payload):
    def _flip(data):
        data["iv"][0] ^= 1

    with pytest.raises(DecryptionFailedError):
        cipher.decrypt_sync(mutate_payload(_flip), PASSWORD)


@pytest.mark.parametrize(
    "field, value",
    [
        ("version", "2.0"),
        ("version", "1.0 "),
        ("version", 1.0),
        ("version", 2),
        ("version", None),
        ("algorithm", "AES-CBC"),
        ("algorithm", None),
    ],
)
def test_unsupported_format_rejected_before_crypto(cipher, mutate_payload, monkeypatch, field, value):
    """Versión o algoritmo distintos se rechazan sin derivar la clave."""
    _forbid_kdf(monkeypatch)
    payload = mutate_payload(lambda data: data.update({field: value}))
    with pytest.raises(UnsupportedFormatError):
        cipher.decrypt_sync(payload, PASSWORD)


def test_future_version_with_other_encoding_is_unsupported(cipher, mutate_payload, monkeypatch):
    """Un payload de otra versión con bytes en base64 es no soportado, no mal formado."""
    _forbid_kdf(monkeypatch)

    def _future(data):
        data.update(
            version="2.0",
            salt="AAECAwQFBgcICQoLDA0ODw==",
            iv="AAECAwQFBgcICQoL",
            ciphertext="c2VjcmV0by1jaWZyYWRvLWNvbi10YWc=",
        )

    with pytest.raises(UnsupportedFormatError):
        cipher.decrypt_sync(mutate_payload(_future), PASSWORD)


@pytest.mark.parametrize("field", ["version", "algorithm"])
def test_missing_format_tag_is_format_error(cipher, mutate_payload, monkeypatch, field):
    """Sin `version` o `algorithm` el payload está mal formado."""
    _forbid_kdf(monkeypatch)
    with pytest.raises(FormatError):
        cipher.decrypt_sync(mutate_payload(lambda data: data.pop(field)), PASSWORD)


@pytest.mark.parametrize(
    "mutator",
    [
        lambda d: d.pop("salt"),
        lambda d: d.pop("iterations"),
        lambda d: d.pop("version"),
        lambda d: d.update(salt=d["salt"][:15]),
        lambda d: d.update(iv=d["iv"] + [0]),
        lambda d: d.update(ciphertext=[256] + d["ciphertext"][1:]),
        lambda d: d.update(ciphertext=[True] + d["ciphertext"][1:]),
        lambda d: d.update(ciphertext=d["ciphertext"][:15]),
        lambda d: d.update(salt="AAAAAAAAAAAAAAAAAAAAAA=="),
        lambda d: d.update(iterations="100000"),
        lambda d: d.update(iterations=0),
    ],
)
def test_malformed_payload_raises_format_error(cipher, mutate_payload, monkeypatch, mutator):
    """Campos ausentes o mal formados producen FormatError."""
    _forbid_kdf(monkeypatch)
    with pytest.raises(FormatError):
        cipher.decrypt_sync(mutate_payload(mutator), PASSWORD)


@pytest.mark.parametrize("text", ["", "no es json", "[]", "null", "42", "{", None, b"\xff\xfe"])
def test_non_parsing_payload_raises_format_error(cipher, text):
    with pytest.raises(FormatError):
        cipher.decrypt_sync(text, PASSWORD)


def test_iterations_are_read_from_payload(cipher):
    """El descifrado usa las iteraciones del payload, no la constante."""
    payload = _craft_payload(MNEMONIC.encode("utf-8"), PASSWORD, iterations=1000)
    assert cipher.decrypt_sync(payload, PASSWORD) == MNEMONIC


def test_excessive_iterations_rejected(cipher, monkeypatch):
    payload = json.loads(_craft_payload(b"x", PASSWORD, iterations=10))
    payload["iterations"] = mc.MAX_ITERATIONS + 1
    _forbid_kdf(monkeypatch)
    with pytest.raises(UnsupportedFormatError):
        cipher.decrypt_sync(json.dumps(payload), PASSWORD)


def test_invalid_utf8_plaintext_is_generic_failure(cipher):
    """Un claro que no es UTF-8 se presenta como fallo genérico de descifrado."""
    payload = _craft_payload(b"\xff\xfe\xfd", PASSWORD, iterations=10)
    with pytest.raises(DecryptionFailedError):
        cipher.decrypt_sync(payload, PASSWORD)


def test_decrypt_with_empty_password(cipher, encrypted_payload):
    with pytest.raises(DecryptionFailedError):
        cipher.decrypt_sync(encrypted_payload, "")


@pytest.mark.parametrize("mnemonic, password", [(MNEMONIC, ""), ("", PASSWORD), (None, PASSWORD), (MNEMONIC, None)])
def test_encrypt_rejects_empty_input(cipher, mnemonic, password):
    """Entradas vacías fallan con un mensaje que no revela el motivo."""
    with pytest.raises(CryptoOperationError) as info:
        cipher.encrypt_sync(mnemonic, password)
    assert str(info.value) == "encryption failed"


def test_encrypt_wraps_primitive_failure(cipher, monkeypatch):
    """Un fallo de la primitiva se traduce a CryptoOperationError."""

    def _fail(*args, **kwargs):
        raise RuntimeError("backend no disponible")

    monkeypatch.setattr(mc, "aes_gcm_encrypt_with_key", _fail)
    with pytest.raises(CryptoOperationError) as info:
        cipher.encrypt_sync(MNEMONIC, PASSWORD)
    assert str(info.value) == "encryption failed"
    assert isinstance(info.value.__cause__, RuntimeError)


def test_encrypt_wraps_random_source_failure(cipher, monkeypatch):
    """Sin fuente de entropía el cifrado falla con CryptoOperationError genérico."""

    def _no_entropy(length):
        raise OSError("sin fuente de aleatoriedad")

    monkeypatch.setattr(mc, "random_bytes", _no_entropy)
    with pytest.raises(CryptoOperationError) as info:
        cipher.encrypt_sync(MNEMONIC, PASSWORD)
    assert str(info.value) == "encryption failed"
    assert isinstance(info.value.__cause__, OSError)


def test_key_material_is_wiped(cipher, monkeypatch):
    """Las claves derivadas quedan a cero tras cifrar y descifrar."""
    keys = []

    def _capture(*args, **kwargs):
        key = derive_key(*args, **kwargs)
        keys.append(key)
        return key

    monkeypatch.setattr(mc, "derive_key", _capture)
    payload = cipher.encrypt_sync(MNEMONIC, PASSWORD)
    with pytest.raises(DecryptionFailedError):
        cipher.decrypt_sync(payload, "wrong-password")
    assert len(keys) == 2
    assert all(len(key) == 32 and is_wiped(key) for key in keys)


def test_unicode_mnemonic_roundtrip(cipher):
    """Mnemónicos con caracteres no ASCII se recuperan byte a byte."""
    mnemonic = "ábaco abdomen abeja abierto abogado abono aborto abrazo abrir abuelo abuso acabar"
    payload = cipher.encrypt_sync(mnemonic, PASSWORD)
    assert cipher.decrypt_sync(payload, PASSWORD) == mnemonic


def test_async_api_roundtrip():
    """Las corrutinas del módulo cifran y descifran sin bloquear el bucle."""

    async def _flow():
        payload = await mc.encrypt_mnemonic(MNEMONIC, PASSWORD)
        plain = await mc.decrypt_mnemonic(payload, PASSWORD)
        with pytest.raises(DecryptionFailedError):
            await mc.decrypt_mnemonic(payload, "wrong-password")
        return plain

    assert asyncio.run(_flow()) == MNEMONIC


def test_async_calls_run_concurrently(cipher, encrypted_payload):
    """Varias operaciones concurrentes no comparten estado."""

    async def _flow():
        return await asyncio.gather(*(cipher.decrypt(encrypted_payload, PASSWORD) for _ in range(3)))

    assert asyncio.run(_flow()) == [MNEMONIC] * 3


def test_errors_share_base_class():
    for error in (CryptoOperationError, FormatError, UnsupportedFormatError, DecryptionFailedError):
        assert issubclass(error, MnemonicCipherError)
    assert not issubclass(UnsupportedFormatError, FormatError)


def test_cipher_exposes_strength_evaluation(cipher):
    result = cipher.evaluate_password_strength("Abcdefghijk1!")
    assert result.is_strong is True
    assert result.score == 1.0
