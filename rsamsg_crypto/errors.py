"""Exceptions raised by rsamsg_crypto.

Every failure the library can classify maps to exactly one of these classes,
so callers can branch on the type instead of parsing messages.
"""


class RsaMessageError(Exception):
    """Base exception for all rsamsg_crypto errors."""


class BlankValuesError(RsaMessageError, ValueError):
    """Message and/or key is blank."""


class InvalidKeyLengthError(RsaMessageError, ValueError):
    """Requested RSA key length is not one of VALID_KEY_LENGTHS."""


class KeyConvertError(RsaMessageError, ValueError):
    """Public key text contains no PEM block."""


class X509ParseError(RsaMessageError, ValueError):
    """Public key PEM payload is not a PKIX RSA public key."""


class PemDecodeError(RsaMessageError, ValueError):
    """Private key text contains no PEM block."""


class X509DecodeError(RsaMessageError, ValueError):
    """Private key PEM payload is not a PKCS1 RSA private key."""


class MessageEncodeError(RsaMessageError, ValueError):
    """Plaintext cannot be encoded as UTF-8 (e.g. it contains a lone surrogate)."""


class MessageDecodeError(RsaMessageError, ValueError):
    """Encoded message body is not valid base64."""


class EncryptionError(RsaMessageError):
    """PKCS1v15 encryption was rejected (usually: message too long for the key)."""


class DecryptionError(RsaMessageError):
    """Message decryption failed.

    Wrong key, corrupted ciphertext and bad padding all raise this same error
    with the same message.
    """


class KeyStoreError(RsaMessageError):
    """A key artifact could not be written."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"cannot write '{path}': {reason}")
        self.path = path
        self.reason = reason
