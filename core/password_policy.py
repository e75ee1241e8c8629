# --------------------------------------------------------------
# File: password_policy.py
# Description: Reglas de evaluación de passphrases para cifrar mnemónicos.
# --------------------------------------------------------------
"""Utilidades para evaluar y generar passphrases robustas.

La evaluación sólo informa: el cifrado nunca se bloquea por una passphrase
débil, es la interfaz quien decide si pide confirmación.
"""

from __future__ import annotations

import re
import secrets
import string
from typing import Any, List, Optional

from core.i18n import t
from core.models import PasswordStrength

MIN_LENGTH = 12
MIN_CLASSES = 3

SYMBOLS = "!@#$%^&*()_+-=[]{};':\"\\|,.<>/?"

COMMON = (
    "password",
    "password123",
    "123456",
    "12345678",
    "qwerty",
    "abc123",
    "admin",
    "letmein",
    "welcome",
    "monkey",
)

LOWER = re.compile(r"[a-z]")
UPPER = re.compile(r"[A-Z]")
DIGIT = re.compile(r"[0-9]")
SYMBOL = re.compile("[" + re.escape(SYMBOLS) + "]")

_FEEDBACK_KEYS = (
    "password_very_weak",
    "password_weak",
    "password_medium",
    "password_strong",
    "password_very_strong",
)

# Alfabeto del generador: los símbolos no incluyen comillas ni barras.
_GEN_SYMBOLS = "!@#$%^&*()_+-=[]{}|;:,.<>?"
_GEN_GROUPS = (string.ascii_uppercase, string.ascii_lowercase, string.digits, _GEN_SYMBOLS)


def class_count(passphrase: str) -> int:
    """Cuenta los grupos de caracteres presentes en la passphrase."""

    return sum(
        [
            1 if UPPER.search(passphrase) else 0,
            1 if LOWER.search(passphrase) else 0,
            1 if DIGIT.search(passphrase) else 0,
            1 if SYMBOL.search(passphrase) else 0,
        ]
    )


def strength_level(score: float) -> str:
    """Clase visual de la barra de robustez según la puntuación."""

    if score <= 0.25:
        return "very-weak"
    if score <= 0.5:
        return "weak"
    if score <= 0.75:
        return "medium"
    return "strong"


def is_weak_password(passphrase: str) -> bool:
    """Detecta si la passphrase contiene alguna contraseña muy común."""

    lowered = passphrase.lower()
    return any(common in lowered for common in COMMON)


def password_feedback(passphrase: str, classes: int, *, locale: Optional[str] = None) -> str:
    """Mensaje de retroalimentación; la longitud mínima tiene prioridad."""

    if len(passphrase) < MIN_LENGTH:
        return t("password_too_short", locale, min=MIN_LENGTH)
    return t(_FEEDBACK_KEYS[classes], locale)


def evaluate_password_strength(passphrase: Any, *, locale: Optional[str] = None) -> PasswordStrength:
    """Evalúa la passphrase sin lanzar excepciones.

    Args:
        passphrase (Any): Passphrase propuesta; cualquier valor que no sea
            `str` se evalúa como vacío.
        locale (Optional[str]): Idioma del mensaje de retroalimentación.

    Returns:
        PasswordStrength: `is_strong`, `score` en [0, 1], `feedback`, `level`
        y si contiene una contraseña común.

    """

    if not isinstance(passphrase, str):
        passphrase = ""

    classes = class_count(passphrase)
    score = classes / 4
    return PasswordStrength(
        is_strong=len(passphrase) >= MIN_LENGTH and classes >= MIN_CLASSES,
        score=score,
        feedback=password_feedback(passphrase, classes, locale=locale),
        level=strength_level(score),
        is_common=is_weak_password(passphrase),
    )


def generate_strong_password(length: int = 16) -> str:
    """Genera una passphrase aleatoria con los cuatro grupos de caracteres.

    Args:
        length (int): Longitud deseada, mínimo 4.

    Returns:
        str: Passphrase generada con `secrets`.

    Raises:
        ValueError: Si `length` es menor que el número de grupos.

    """

    if length < len(_GEN_GROUPS):
        raise ValueError(f"la longitud mínima es {len(_GEN_GROUPS)}")

    alphabet = "".join(_GEN_GROUPS)
    chars: List[str] = [secrets.choice(group) for group in _GEN_GROUPS]
    chars.extend(secrets.choice(alphabet) for _ in range(length - len(chars)))
    secrets.SystemRandom().shuffle(chars)
    return "".join(chars)
