# --------------------------------------------------------------
# File: i18n.py
# Description: Catálogos de mensajes (es/en) para la UI y los servicios.
# --------------------------------------------------------------
"""Traducciones ligeras con sustitución de parámetros `{nombre}`."""

from typing import Dict, Optional

from core.config import APP_LOCALE

DEFAULT_LOCALE = "es"

MESSAGES: Dict[str, Dict[str, str]] = {
    "es": {
        "app_title": "Semilla Segura",
        "app_subtitle": "Cifra tu frase mnemónica con AES-GCM y PBKDF2. Nada se guarda en el servidor.",
        "encrypt_section": "Cifrar mnemónico",
        "decrypt_section": "Descifrar mnemónico",
        "mnemonic_label": "Frase mnemónica",
        "password_label_encrypt": "Passphrase de cifrado",
        "password_label_decrypt": "Passphrase de descifrado",
        "encrypted_text_label": "Texto cifrado",
        "generate_password": "Generar passphrase robusta",
        "encrypt_button": "Cifrar",
        "decrypt_button": "Descifrar",
        "download_file": "Descargar archivo",
        "upload_mnemonic_txt": "Sube un archivo .txt con el mnemónico",
        "upload_encrypted_file": "Sube el archivo cifrado (.txt/.json)",
        "msg_encrypt_success": "Cifrado correcto. Guarda el texto cifrado.",
        "msg_decrypt_success": "Descifrado correcto.",
        "msg_decrypt_failed": "No se ha podido descifrar: passphrase incorrecta o datos alterados.",
        "msg_encrypt_failed": "No se ha podido cifrar el mnemónico.",
        "msg_need_mnemonic": "Introduce el mnemónico.",
        "msg_need_encrypt_password": "Introduce la passphrase de cifrado.",
        "msg_need_encrypted": "Introduce el texto cifrado.",
        "msg_need_decrypt_password": "Introduce la passphrase de descifrado.",
        "msg_mnemonic_length_invalid": "El mnemónico debe tener entre {min} y {max} palabras.",
        "msg_invalid_format": "El texto cifrado no tiene un formato válido.",
        "msg_unsupported_format": "Versión o algoritmo de cifrado no soportados.",
        "msg_weak_password_confirm": "Passphrase débil: {feedback} ¿Continuar de todos modos?",
        "allow_weak_password": "Cifrar aunque la passphrase sea débil",
        "info_version": "Versión",
        "info_algorithm": "Algoritmo",
        "info_iterations": "Iteraciones",
        "info_data_size": "Tamaño cifrado (ct_len)",
        "msg_invalid_file": "Sube un archivo de texto (.txt o .json).",
        "msg_file_read_failed": "No se ha podido leer el archivo.",
        "msg_common_password": "Contiene una contraseña muy común.",
        "password_too_short": "La passphrase necesita al menos {min} caracteres.",
        "password_very_weak": "Robustez muy débil.",
        "password_weak": "Robustez débil.",
        "password_medium": "Robustez media.",
        "password_strong": "Robustez fuerte.",
        "password_very_strong": "Robustez muy fuerte.",
        "tip_save_cipher": "Guarda el texto cifrado en un gestor de contraseñas, no por email.",
        "tip_password_warning": "La passphrase es la única forma de recuperar el mnemónico.",
    },
    "en": {
        "app_title": "Secure Seed",
        "app_subtitle": "Encrypt your mnemonic phrase with AES-GCM and PBKDF2. Nothing is stored server-side.",
        "encrypt_section": "Encrypt mnemonic",
        "decrypt_section": "Decrypt mnemonic",
        "mnemonic_label": "Mnemonic phrase",
        "password_label_encrypt": "Encryption password",
        "password_label_decrypt": "Decryption password",
        "encrypted_text_label": "Encrypted text",
        "generate_password": "Generate strong password",
        "encrypt_button": "Encrypt",
        "decrypt_button": "Decrypt",
        "download_file": "Download file",
        "upload_mnemonic_txt": "Upload a .txt file with the mnemonic",
        "upload_encrypted_file": "Upload the encrypted file (.txt/.json)",
        "msg_encrypt_success": "Encryption succeeded. Save the encrypted text.",
        "msg_decrypt_success": "Decryption succeeded.",
        "msg_decrypt_failed": "Decryption failed: wrong password or tampered data.",
        "msg_encrypt_failed": "The mnemonic could not be encrypted.",
        "msg_need_mnemonic": "Please enter the mnemonic.",
        "msg_need_encrypt_password": "Please enter the encryption password.",
        "msg_need_encrypted": "Please enter the encrypted text.",
        "msg_need_decrypt_password": "Please enter the decryption password.",
        "msg_mnemonic_length_invalid": "The mnemonic must have between {min} and {max} words.",
        "msg_invalid_format": "The encrypted text is not in a valid format.",
        "msg_unsupported_format": "Unsupported encryption version or algorithm.",
        "msg_weak_password_confirm": "Weak password: {feedback} Continue anyway?",
        "allow_weak_password": "Encrypt even if the password is weak",
        "info_version": "Version",
        "info_algorithm": "Algorithm",
        "info_iterations": "Iterations",
        "info_data_size": "Encrypted size (ct_len)",
        "msg_invalid_file": "Please upload a text file (.txt or .json).",
        "msg_file_read_failed": "The file could not be read.",
        "msg_common_password": "Contains a very common password.",
        "password_too_short": "Password must be at least {min} characters long.",
        "password_very_weak": "Very weak password.",
        "password_weak": "Weak password.",
        "password_medium": "Medium password.",
        "password_strong": "Strong password.",
        "password_very_strong": "Very strong password.",
        "tip_save_cipher": "Keep the encrypted text in a password manager, not in email.",
        "tip_password_warning": "The password is the only way to recover the mnemonic.",
    },
}


def resolve_locale(locale: Optional[str] = None) -> str:
    """Normaliza el código de idioma (`en-US` -> `en`) con caída a español."""

    code = (locale or APP_LOCALE or DEFAULT_LOCALE).lower().split("-")[0].split("_")[0]
    return code if code in MESSAGES else DEFAULT_LOCALE


def t(key: str, locale: Optional[str] = None, **params: object) -> str:
    """Devuelve el mensaje traducido, o la propia clave si no existe."""

    catalog = MESSAGES[resolve_locale(locale)]
    text = catalog.get(key) or MESSAGES[DEFAULT_LOCALE].get(key, key)
    for name, value in params.items():
        text = text.replace("{" + name + "}", str(value))
    return text
