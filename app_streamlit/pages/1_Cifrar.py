# --------------------------------------------------------------
# File: 1_Cifrar.py
# Description: Cifrado de la frase mnemónica y descarga del payload.
# --------------------------------------------------------------

import streamlit as st

from api.services import encrypt_operation
from core.errors import InputValidationError
from core.i18n import t
from core.password_policy import evaluate_password_strength, generate_strong_password
from core.storage import encrypted_filename, load_new_upload

locale = st.session_state.get("locale")

st.title(f"🔒 {t('encrypt_section', locale)}")

# Permite cargar el mnemónico desde un archivo de texto.
upload = st.file_uploader(t("upload_mnemonic_txt", locale), type=["txt"], key="enc_upload")
try:
    load_new_upload(st.session_state, upload, "enc_mnemonic", locale=locale)
except InputValidationError as exc:
    st.error(str(exc))

mnemonic = st.text_area(t("mnemonic_label", locale), key="enc_mnemonic", height=120)

if st.button(t("generate_password", locale), key="btn_generate"):
    st.session_state["enc_pass"] = generate_strong_password()
    st.code(st.session_state["enc_pass"])

password = st.text_input(t("password_label_encrypt", locale), type="password", key="enc_pass")

# Muestra la robustez estimada; sólo avisa, no bloquea.
if password:
    strength = evaluate_password_strength(password, locale=locale)
    st.progress(strength.score, text=strength.feedback)
    if strength.is_common:
        st.warning(t("msg_common_password", locale))

allow_weak = st.checkbox(t("allow_weak_password", locale), key="allow_weak")

if st.button(t("encrypt_button", locale), key="btn_encrypt"):
    with st.spinner("..."):
        ok, msg, payload, dbg = encrypt_operation(
            mnemonic, password, allow_weak=allow_weak, locale=locale
        )
    if ok:
        st.success(msg)
        st.text_area(t("encrypted_text_label", locale), value=payload, height=160)
        st.download_button(
            f"⬇️ {t('download_file', locale)}",
            data=payload,
            file_name=encrypted_filename(),
            mime="text/plain",
        )
        st.code(dbg)
    else:
        st.error(msg)
