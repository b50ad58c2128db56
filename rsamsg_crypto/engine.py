import logging
from typing import Optional

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa
from rsa import pem

from .codec import unwrap_message, wrap_message
from .errors import (
    BlankValuesError,
    DecryptionError,
    EncryptionError,
    KeyConvertError,
    MessageEncodeError,
    PemDecodeError,
    X509DecodeError,
    X509ParseError,
)
from .keys import PRIVATE_KEY_LABEL, PUBLIC_KEY_LABEL

# PKCS1v15 padding takes at least this many bytes of the modulus.
PKCS1V15_OVERHEAD = 11

# Tried in order; the first is what generate_keypair() writes, the rest are
# the labels OpenSSL uses.
PUBLIC_KEY_LABELS = (PUBLIC_KEY_LABEL, 'PUBLIC KEY', 'RSA PUBLIC KEY')
PRIVATE_KEY_LABELS = (PRIVATE_KEY_LABEL, 'RSA PRIVATE KEY', 'PRIVATE KEY')

log = logging.getLogger(__name__)


# --- Key helpers ---

def _load_pem(text: str, labels) -> Optional[bytes]:
    """Return the DER payload of the first PEM block carrying one of labels."""
    for label in labels:
        try:
            return pem.load_pem(text, label)
        except ValueError:
            continue
    return None


def _load_public_key(public_key_pem: str) -> rsa.RSAPublicKey:
    der = _load_pem(public_key_pem, PUBLIC_KEY_LABELS)
    if der is None:
        raise KeyConvertError("cannot convert key, PEM decode failed")

    try:
        key = serialization.load_der_public_key(der)
    except (ValueError, UnsupportedAlgorithm) as e:
        raise X509ParseError("parsing x509 public key data failed") from e

    if not isinstance(key, rsa.RSAPublicKey):
        raise X509ParseError("public key is not an RSA key")
    return key


def _load_private_key(private_key_pem: str) -> rsa.RSAPrivateKey:
    der = _load_pem(private_key_pem, PRIVATE_KEY_LABELS)
    if der is None:
        raise PemDecodeError("private key PEM decoding failed")

    try:
        key = serialization.load_der_private_key(der, password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise X509DecodeError("x509 private key decoding failed") from e

    if not isinstance(key, rsa.RSAPrivateKey):
        raise X509DecodeError("private key is not an RSA key")
    return key


def max_message_length(public_key_pem: str) -> int:
    """Largest plaintext, in bytes, that encrypt_bytes() accepts for this key."""
    key = _load_public_key(public_key_pem)
    return (key.key_size + 7) // 8 - PKCS1V15_OVERHEAD


# --- Bytes API ---

def encrypt_bytes(plain: bytes, public_key_pem: str) -> bytes:
    """Encrypt ``plain`` with PKCS1v15 under a PEM encoded RSA public key.

    Raises KeyConvertError if no PEM block is found, X509ParseError if the
    block is not an RSA SubjectPublicKeyInfo, and EncryptionError if the
    primitive rejects the input (plaintext longer than modulus bytes - 11).
    """
    key = _load_public_key(public_key_pem)
    try:
        return key.encrypt(plain, padding.PKCS1v15())
    except ValueError as e:
        raise EncryptionError("encrypting message with PKCS1v15 failed") from e


def decrypt_bytes(cipher: bytes, private_key_pem: str) -> bytes:
    """Decrypt PKCS1v15 ciphertext with a PEM encoded RSA private key.

    Raises PemDecodeError / X509DecodeError for an unusable key. Every failure
    of the decryption itself raises the same DecryptionError.
    """
    key = _load_private_key(private_key_pem)
    try:
        return key.decrypt(cipher, padding.PKCS1v15())
    except ValueError:
        raise DecryptionError("message decryption failed") from None


# --- Message API ---

def encrypt_message(plaintext: Optional[str], public_key_pem: Optional[str]) -> str:
    """Encrypt a text message and return it as an encoded message block."""
    if not plaintext or not public_key_pem:
        raise BlankValuesError("message and/or public key is blank")

    try:
        plain = plaintext.encode('utf-8')
    except UnicodeEncodeError as e:
        raise MessageEncodeError("message is not encodable as UTF-8") from e

    cipher = encrypt_bytes(plain, public_key_pem)
    log.debug("Encrypted %d byte message", len(cipher))
    return wrap_message(cipher)


def decrypt_message(encoded: Optional[str], private_key_pem: Optional[str]) -> str:
    """Decrypt an encoded message block back to text."""
    if not encoded or not private_key_pem:
        raise BlankValuesError("message and/or private key is blank")

    cipher = unwrap_message(encoded)
    plain = decrypt_bytes(cipher, private_key_pem)
    try:
        return plain.decode('utf-8')
    except UnicodeDecodeError:
        raise DecryptionError("message decryption failed") from None
