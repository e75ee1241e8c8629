# --------------------------------------------------------------
# File: Home.py
# Description: Define la página principal de Streamlit con el resumen del flujo.
# --------------------------------------------------------------

import streamlit as st

from core.config import configure_logging
from core.i18n import MESSAGES, resolve_locale, t

configure_logging()

# Configura los metadatos de la página principal de la aplicación.
st.set_page_config(page_title="Semilla Segura", page_icon="🔐", layout="centered")

# Selector de idioma compartido por todas las páginas.
locales = list(MESSAGES)
current = resolve_locale(st.session_state.get("locale"))
st.session_state["locale"] = st.sidebar.selectbox(
    "Idioma / Language", locales, index=locales.index(current)
)
locale = st.session_state["locale"]

st.title(f"🔐 {t('app_title', locale)}")
st.write(t("app_subtitle", locale))
st.info(t("tip_save_cipher", locale))
st.warning(t("tip_password_warning", locale))
