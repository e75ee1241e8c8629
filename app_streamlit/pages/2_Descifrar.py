# --------------------------------------------------------------
# File: 2_Descifrar.py
# Description: Recuperación de la frase mnemónica a partir del texto cifrado.
# --------------------------------------------------------------

import streamlit as st

from api.services import decrypt_operation, describe_payload
from core.errors import InputValidationError
from core.i18n import t
from core.storage import load_new_upload

locale = st.session_state.get("locale")

st.title(f"🔓 {t('decrypt_section', locale)}")

upload = st.file_uploader(t("upload_encrypted_file", locale), type=["txt", "json"], key="dec_upload")
try:
    load_new_upload(st.session_state, upload, "dec_payload", locale=locale)
except InputValidationError as exc:
    st.error(str(exc))

payload_text = st.text_area(t("encrypted_text_label", locale), key="dec_payload", height=160)

# Resumen no sensible del payload pegado.
info = describe_payload(payload_text) if payload_text else None
if info is not None:
    col1, col2 = st.columns(2)
    with col1:
        st.write(f"**{t('info_version', locale)}:**", info.version)
        st.write(f"**{t('info_algorithm', locale)}:**", info.algorithm)
    with col2:
        st.write(f"**{t('info_iterations', locale)}:**", info.iterations)
        st.write(f"**{t('info_data_size', locale)}:**", info.data_size)

password = st.text_input(t("password_label_decrypt", locale), type="password", key="dec_pass")

if st.button(t("decrypt_button", locale), key="btn_decrypt"):
    with st.spinner("..."):
        ok, msg, mnemonic, dbg = decrypt_operation(payload_text, password, locale=locale)
    if ok:
        st.success(msg)
        # El mnemónico queda oculto hasta que el usuario lo despliega.
        with st.expander("👁️ " + t("mnemonic_label", locale), expanded=False):
            st.code(mnemonic, language="text")
        st.code(dbg)
    else:
        st.error(msg)
