# --------------------------------------------------------------
# File: secure_memory.py
# Description: Borrado best-effort de material sensible y comparaciones seguras.
# --------------------------------------------------------------
"""Utilidades para limpiar buffers mutables con claves, salts o texto en claro.

Python no garantiza que no existan copias previas de un valor (objetos
`bytes`/`str` inmutables, internado de cadenas, buffers internos de las
librerías). Estas funciones sólo sobrescriben los buffers mutables que el
propio código controla.
"""

import hmac
from typing import Optional, Union

Wipeable = Union[bytearray, memoryview]


def wipe(*buffers: Optional[Wipeable]) -> None:
    """Sobrescribe con ceros cada buffer mutable recibido.

    Args:
        *buffers (Optional[Wipeable]): Buffers a limpiar; se ignoran `None`
            y objetos inmutables.

    """

    for buf in buffers:
        if isinstance(buf, bytearray):
            buf[:] = bytes(len(buf))
        elif isinstance(buf, memoryview) and not buf.readonly:
            buf.cast("B")[:] = bytes(buf.nbytes)


def is_wiped(buf: Wipeable) -> bool:
    """Devuelve True si el buffer sólo contiene ceros."""

    return not any(bytes(buf))


def secure_compare(a: Union[str, bytes], b: Union[str, bytes]) -> bool:
    """Compara dos valores en tiempo constante."""

    if isinstance(a, str):
        a = a.encode("utf-8")
    if isinstance(b, str):
        b = b.encode("utf-8")
    return hmac.compare_digest(a, b)
