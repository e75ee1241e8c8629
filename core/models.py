# --------------------------------------------------------------
# File: models.py
# Description: Modelos de datos comunes utilizados por la capa criptográfica.
# --------------------------------------------------------------
"""Modelos Pydantic que encapsulan el payload cifrado y sus metadatos."""

from __future__ import annotations

import json
from typing import Any, List, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictInt,
    StrictStr,
    ValidationError,
    field_serializer,
    field_validator,
)

from core.errors import FormatError, UnsupportedFormatError

FORMAT_VERSION = "1.0"
ALGORITHM = "AES-GCM-PBKDF2"
SALT_LENGTH = 16
IV_LENGTH = 12
TAG_LENGTH = 16


def _as_bytes(value: Any) -> bytes:
    """Convierte un array JSON de enteros 0-255 en bytes sin pérdidas."""

    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if not isinstance(value, list):
        raise ValueError("se esperaba un array de enteros")
    for item in value:
        # bool es subclase de int y no es un byte válido en el formato.
        if isinstance(item, bool) or not isinstance(item, int) or not 0 <= item <= 255:
            raise ValueError("los bytes deben ser enteros entre 0 y 255")
    return bytes(value)


class EncryptedPayload(BaseModel):
    """Payload cifrado persistible con el formato versionado `1.0`.

    Attributes:
        salt (bytes): Salt PBKDF2 de 16 bytes.
        iv (bytes): Nonce AES-GCM de 12 bytes.
        ciphertext (bytes): Salida AES-256-GCM con la etiqueta de 16 bytes al final.
        version (str): Versión del formato.
        algorithm (str): Identificador de la suite criptográfica.
        iterations (int): Iteraciones PBKDF2 empleadas.

    """

    model_config = ConfigDict(frozen=True)

    salt: bytes
    iv: bytes
    ciphertext: bytes
    version: StrictStr
    algorithm: StrictStr
    iterations: StrictInt = Field(gt=0)

    @field_validator("salt", "iv", "ciphertext", mode="before")
    @classmethod
    def _parse_byte_array(cls, value: Any) -> bytes:
        return _as_bytes(value)

    @field_validator("salt")
    @classmethod
    def _check_salt(cls, value: bytes) -> bytes:
        if len(value) != SALT_LENGTH:
            raise ValueError(f"salt debe tener {SALT_LENGTH} bytes")
        return value

    @field_validator("iv")
    @classmethod
    def _check_iv(cls, value: bytes) -> bytes:
        if len(value) != IV_LENGTH:
            raise ValueError(f"iv debe tener {IV_LENGTH} bytes")
        return value

    @field_validator("ciphertext")
    @classmethod
    def _check_ciphertext(cls, value: bytes) -> bytes:
        if len(value) < TAG_LENGTH:
            raise ValueError("ciphertext demasiado corto para contener la etiqueta")
        return value

    @field_serializer("salt", "iv", "ciphertext")
    def _dump_byte_array(self, value: bytes) -> List[int]:
        return list(value)

    def to_json(self) -> str:
        """Serializa al formato de intercambio (arrays de enteros, JSON compacto)."""

        return json.dumps(self.model_dump(), separators=(",", ":"))

    @classmethod
    def from_json(cls, text: Any) -> "EncryptedPayload":
        """Analiza el texto del payload lanzando `FormatError` si no encaja.

        Args:
            text (Any): Texto JSON recibido del llamante.

        Returns:
            EncryptedPayload: Payload validado con versión y algoritmo soportados.

        Raises:
            FormatError: Si no es JSON, no es un objeto o faltan campos.
            UnsupportedFormatError: Si `version` o `algorithm` no coinciden.

        """

        if isinstance(text, (bytes, bytearray)):
            try:
                text = bytes(text).decode("utf-8")
            except UnicodeDecodeError:
                raise FormatError("payload is not valid UTF-8") from None
        if not isinstance(text, str):
            raise FormatError("payload must be text")
        try:
            data = json.loads(text)
        except json.JSONDecodeError:
            raise FormatError("payload is not valid JSON") from None
        if not isinstance(data, dict):
            raise FormatError("payload must be a JSON object")
        missing = [field for field in ("version", "algorithm") if field not in data]
        if missing:
            raise FormatError(f"malformed payload fields: {', '.join(missing)}")
        # La etiqueta de formato se comprueba antes de leer los campos binarios.
        if data["version"] != FORMAT_VERSION or data["algorithm"] != ALGORITHM:
            raise UnsupportedFormatError("unsupported payload version or algorithm")
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            fields = sorted({str(err["loc"][0]) for err in exc.errors() if err["loc"]})
            raise FormatError(f"malformed payload fields: {', '.join(fields)}") from None


class PasswordStrength(BaseModel):
    """Resultado de evaluar la robustez de una passphrase.

    Attributes:
        is_strong (bool): Longitud >= 12 y al menos 3 grupos de caracteres.
        score (float): Grupos presentes divididos entre 4.
        feedback (str): Mensaje localizado para la interfaz.
        level (str): Clase visual de la barra de fuerza.
        is_common (bool): Contiene una contraseña muy conocida.

    """

    model_config = ConfigDict(frozen=True)

    is_strong: bool
    score: float
    feedback: str
    level: str
    is_common: bool = False


class PayloadInfo(BaseModel):
    """Resumen no sensible de un payload para mostrar en la UI."""

    version: Optional[Any] = None
    algorithm: Optional[Any] = None
    iterations: Optional[Any] = None
    data_size: int = 0
