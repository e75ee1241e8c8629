# --------------------------------------------------------------
# File: conftest.py
# Description: Fixtures compartidas: mnemónico de ejemplo y payload cifrado.
# --------------------------------------------------------------

import json
from typing import Any, Callable, Dict

import pytest

from core.mnemonic_cipher import MnemonicCipher

MNEMONIC = "abandon ability able about above absent absorb abstract absurd abuse access accident"
PASSWORD = "Tr0ub4dor&3xyz!"


@pytest.fixture(scope="session")
def cipher() -> MnemonicCipher:
    """Instancia compartida del cifrador (no tiene estado)."""
    return MnemonicCipher(locale="es")


@pytest.fixture(scope="session")
def encrypted_payload(cipher) -> str:
    """Payload cifrado una sola vez por sesión para ahorrar derivaciones PBKDF2.

    Returns:
        str: Texto JSON del mnemónico de ejemplo cifrado con `PASSWORD`.
    """
    return cipher.encrypt_sync(MNEMONIC, PASSWORD)


@pytest.fixture
def mutate_payload(encrypted_payload) -> Callable[[Callable[[Dict[str, Any]], None]], str]:
    """Devuelve un helper que aplica una mutación al payload y lo reserializa.

    Returns:
        Callable: Función que recibe un mutador del diccionario y devuelve el JSON.
    """

    def _mutate(mutator: Callable[[Dict[str, Any]], None]) -> str:
        data = json.loads(encrypted_payload)
        mutator(data)
        return json.dumps(data)

    return _mutate
