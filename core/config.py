# --------------------------------------------------------------
# File: config.py
# Description: Configuración de entorno y logging de la aplicación.
# --------------------------------------------------------------
"""Lectura de variables de entorno (.env) compartidas por la UI y los servicios."""

import logging
import os

from dotenv import load_dotenv

load_dotenv()

APP_LOCALE = os.getenv("APP_LOCALE", "es")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
EXPORT_DIR = os.getenv("EXPORT_DIR", "./_exports")

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Configura el logging raíz una sola vez con el nivel indicado."""

    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=_LOG_FORMAT)
