"""
One-shot RSA messaging utilities.

High-level API:
- generate_keypair(key_length=2048) -> KeyPair
- save_keypair(keypair, base_path) -> None  (writes '<base>.pvt' and '<base>.pub')
- load_keypair(base_path) -> (KeyPair, LoadStatus)
- encrypt_message(plaintext, public_key_pem) -> encoded message text
- decrypt_message(encoded, private_key_pem) -> plaintext

Lower level:
- encrypt_bytes / decrypt_bytes: PKCS1v15 on raw bytes
- wrap_message / unwrap_message: the '-----BEGIN ENCODED MESSAGE-----' armor

Exceptions are raised on errors, all subclasses of RsaMessageError.
"""

from .codec import (
    MESSAGE_FOOTER,
    MESSAGE_HEADER,
    MESSAGE_LINE_LENGTH,
    unwrap_message,
    wrap_message,
)
from .engine import (
    decrypt_bytes,
    decrypt_message,
    encrypt_bytes,
    encrypt_message,
    max_message_length,
)
from .errors import (
    BlankValuesError,
    DecryptionError,
    EncryptionError,
    InvalidKeyLengthError,
    KeyConvertError,
    KeyStoreError,
    MessageDecodeError,
    MessageEncodeError,
    PemDecodeError,
    RsaMessageError,
    X509DecodeError,
    X509ParseError,
)
from .keys import (
    DEFAULT_KEY_LENGTH,
    VALID_KEY_LENGTHS,
    KeyPair,
    LoadStatus,
    generate_keypair,
    key_paths,
    load_keypair,
    save_keypair,
)

__version__ = "0.1.0"

__all__ = [
    "generate_keypair",
    "save_keypair",
    "load_keypair",
    "key_paths",
    "encrypt_message",
    "decrypt_message",
    "encrypt_bytes",
    "decrypt_bytes",
    "max_message_length",
    "wrap_message",
    "unwrap_message",
    "KeyPair",
    "LoadStatus",
    "VALID_KEY_LENGTHS",
    "DEFAULT_KEY_LENGTH",
    "MESSAGE_HEADER",
    "MESSAGE_FOOTER",
    "MESSAGE_LINE_LENGTH",
    "RsaMessageError",
    "BlankValuesError",
    "InvalidKeyLengthError",
    "KeyConvertError",
    "X509ParseError",
    "PemDecodeError",
    "X509DecodeError",
    "MessageDecodeError",
    "MessageEncodeError",
    "EncryptionError",
    "DecryptionError",
    "KeyStoreError",
]
