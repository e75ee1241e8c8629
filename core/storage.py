# --------------------------------------------------------------
# File: storage.py
# Description: Lectura de archivos subidos y escritura de payloads cifrados.
# --------------------------------------------------------------
"""Funciones auxiliares de entrada/salida para archivos de texto cifrado."""

from __future__ import annotations

import os
from datetime import UTC, datetime
from typing import Any, MutableMapping, Optional

from core.config import EXPORT_DIR
from core.errors import InputValidationError
from core.i18n import t

__all__ = [
    "encrypted_filename",
    "is_valid_text_file",
    "load_new_upload",
    "load_payload",
    "read_text_upload",
    "save_payload",
]

TEXT_EXTENSIONS = (".txt", ".json")


def _ensure_parent_dir(path: str) -> None:
    """Garantiza que exista el directorio padre del archivo de destino."""

    parent = os.path.dirname(path) or "."
    os.makedirs(parent, exist_ok=True)


def is_valid_text_file(name: str, mime: Optional[str] = None) -> bool:
    """Acepta archivos `text/plain` o con extensión `.txt`/`.json`."""

    return mime == "text/plain" or (name or "").lower().endswith(TEXT_EXTENSIONS)


def read_text_upload(
    data: bytes, name: str, mime: Optional[str] = None, *, locale: Optional[str] = None
) -> str:
    """Decodifica el contenido de un archivo subido.

    Args:
        data (bytes): Contenido binario del archivo.
        name (str): Nombre original del archivo.
        mime (Optional[str]): Tipo MIME declarado por el navegador.
        locale (Optional[str]): Idioma de los mensajes de error.

    Returns:
        str: Texto del archivo sin BOM.

    Raises:
        InputValidationError: Si el tipo no es de texto o no es UTF-8.

    """

    if not is_valid_text_file(name, mime):
        raise InputValidationError(t("msg_invalid_file", locale))
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError:
        raise InputValidationError(t("msg_file_read_failed", locale)) from None


def load_new_upload(
    state: MutableMapping[str, Any], upload: Any, target_key: str, *, locale: Optional[str] = None
) -> bool:
    """Copia el archivo subido en `state[target_key]` sólo cuando es uno nuevo.

    El identificador del último archivo cargado se guarda en
    `state[f"{target_key}_file_id"]`, de modo que las ediciones posteriores
    del usuario no se sobrescriben mientras el archivo siga seleccionado.

    Args:
        state (MutableMapping[str, Any]): Estado de sesión de la interfaz.
        upload (Any): Archivo subido con `file_id`, `name`, `type` y `getvalue()`.
        target_key (str): Clave del widget de texto que recibe el contenido.
        locale (Optional[str]): Idioma de los mensajes de error.

    Returns:
        bool: True si se ha cargado el contenido del archivo.

    Raises:
        InputValidationError: Si el archivo nuevo no es texto UTF-8.

    """

    marker = f"{target_key}_file_id"
    if upload is None:
        state.pop(marker, None)
        return False
    if state.get(marker) == upload.file_id:
        return False
    # Se marca antes de leer para no repetir el error en cada recarga.
    state[marker] = upload.file_id
    state[target_key] = read_text_upload(upload.getvalue(), upload.name, upload.type, locale=locale)
    return True


def encrypted_filename(prefix: str = "encrypted-mnemonic", now: Optional[datetime] = None) -> str:
    """Nombre de descarga con marca temporal ISO sin `:` ni `.`."""

    stamp = (now or datetime.now(UTC)).isoformat().replace(":", "-").replace(".", "-")
    return f"{prefix}-{stamp}.txt"


def save_payload(text: str, directory: str = EXPORT_DIR, filename: Optional[str] = None) -> str:
    """Guarda el payload cifrado aplicando escritura atómica.

    Returns:
        str: Ruta final del archivo escrito.

    """

    path = os.path.join(directory, filename or encrypted_filename())
    _ensure_parent_dir(path)
    tmp_path = f"{path}.tmp"
    with open(tmp_path, "w", encoding="utf-8") as handler:
        handler.write(text)
    os.replace(tmp_path, path)
    return path


def load_payload(path: str) -> str:
    """Lee un payload cifrado previamente guardado."""

    with open(path, "r", encoding="utf-8") as handler:
        return handler.read()
