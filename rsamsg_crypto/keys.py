import logging
import os
from dataclasses import dataclass
from enum import IntFlag
from typing import Optional, Tuple

import rsa as pyrsa
from rsa import pem
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from .errors import BlankValuesError, InvalidKeyLengthError, KeyStoreError

# De facto / commonly accepted RSA key lengths.
VALID_KEY_LENGTHS = frozenset({512, 1024, 2048, 3072, 4096, 7680, 15360})
DEFAULT_KEY_LENGTH = 2048
PUBLIC_EXPONENT = 65537

PRIVATE_KEY_LABEL = 'RSA Private Key'
PUBLIC_KEY_LABEL = 'RSA Public Key'

PRIVATE_KEY_SUFFIX = '.pvt'
PUBLIC_KEY_SUFFIX = '.pub'
KEY_FILE_MODE = 0o700

# cryptography refuses to generate anything shorter.
_MIN_NATIVE_KEY_LENGTH = 1024

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class KeyPair:
    """PEM encoded RSA public and private key.

    A pair from generate_keypair() always has both fields. A pair from
    load_keypair() has None for each artifact that could not be read; check
    the accompanying LoadStatus before using it.
    """

    public_key: Optional[str]
    private_key: Optional[str]

    @property
    def is_complete(self) -> bool:
        return bool(self.public_key) and bool(self.private_key)


class LoadStatus(IntFlag):
    """Which artifacts load_keypair() could not read."""

    EMPTY = 0
    PRIVATE_MISSING = 1
    PUBLIC_MISSING = 2
    BOTH = 3

    @property
    def can_encrypt(self) -> bool:
        return not self & LoadStatus.PUBLIC_MISSING

    @property
    def can_decrypt(self) -> bool:
        return not self & LoadStatus.PRIVATE_MISSING


# --- Key generation ---

def _generate_private_key(key_length: int) -> rsa.RSAPrivateKey:
    if key_length >= _MIN_NATIVE_KEY_LENGTH:
        return rsa.generate_private_key(public_exponent=PUBLIC_EXPONENT, key_size=key_length)

    _, priv = pyrsa.newkeys(key_length, exponent=PUBLIC_EXPONENT)
    numbers = rsa.RSAPrivateNumbers(
        p=priv.p,
        q=priv.q,
        d=priv.d,
        dmp1=priv.exp1,
        dmq1=priv.exp2,
        iqmp=priv.coef,
        public_numbers=rsa.RSAPublicNumbers(e=priv.e, n=priv.n),
    )
    return numbers.private_key()


def generate_keypair(key_length: int = DEFAULT_KEY_LENGTH) -> KeyPair:
    """Generate an RSA key pair of ``key_length`` bits.

    The private key is PKCS1 DER in an 'RSA Private Key' PEM block, the public
    key is SubjectPublicKeyInfo DER in an 'RSA Public Key' PEM block.

    Raises InvalidKeyLengthError if key_length is not in VALID_KEY_LENGTHS.
    """
    if (isinstance(key_length, bool) or not isinstance(key_length, int)
            or key_length not in VALID_KEY_LENGTHS):
        raise InvalidKeyLengthError(f"invalid key length: {key_length!r}")

    log.debug("Generating %d-bit RSA key pair", key_length)
    key = _generate_private_key(key_length)
    private_der = key.private_bytes(
        encoding=serialization.Encoding.DER,
        format=serialization.PrivateFormat.TraditionalOpenSSL,
        encryption_algorithm=serialization.NoEncryption(),
    )
    public_der = key.public_key().public_bytes(
        encoding=serialization.Encoding.DER,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    return KeyPair(
        public_key=pem.save_pem(public_der, PUBLIC_KEY_LABEL).decode('ascii'),
        private_key=pem.save_pem(private_der, PRIVATE_KEY_LABEL).decode('ascii'),
    )


# --- Key storage ---

def key_paths(base_path: str) -> Tuple[str, str]:
    """Return (private_path, public_path) for a key pair stored at base_path."""
    base_path = os.fspath(base_path)
    return base_path + PRIVATE_KEY_SUFFIX, base_path + PUBLIC_KEY_SUFFIX


def _write_key_file(path: str, text: str) -> None:
    try:
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, KEY_FILE_MODE)
        with os.fdopen(fd, 'wb') as key_file:
            key_file.write(text.encode('utf-8'))
    except OSError as e:
        raise KeyStoreError(path, e.strerror or str(e)) from e
    log.debug("Wrote key file '%s'", path)


def _read_key_file(path: str) -> Optional[str]:
    try:
        with open(path, 'rb') as key_file:
            return key_file.read().decode('utf-8')
    except (OSError, UnicodeDecodeError):
        log.debug("Key file '%s' could not be read", path)
        return None


def save_keypair(keypair: KeyPair, base_path: str) -> None:
    """Write keypair to '<base_path>.pvt' and '<base_path>.pub'.

    The two writes are independent: if the public key write fails the private
    key file has already been replaced. Raises KeyStoreError on I/O failure.
    """
    if not keypair.is_complete:
        raise BlankValuesError("key pair is incomplete")

    private_path, public_path = key_paths(base_path)
    _write_key_file(private_path, keypair.private_key)
    _write_key_file(public_path, keypair.public_key)


def load_keypair(base_path: str) -> Tuple[KeyPair, LoadStatus]:
    """Load '<base_path>.pub' and '<base_path>.pvt'.

    Never raises for missing or unreadable files. Each artifact that could not
    be read is None in the returned KeyPair and flagged in the LoadStatus:

        EMPTY (0)            both keys loaded
        PRIVATE_MISSING (1)  can encrypt, cannot decrypt
        PUBLIC_MISSING (2)   can decrypt, cannot encrypt
        BOTH (3)             nothing usable
    """
    private_path, public_path = key_paths(base_path)
    status = LoadStatus.EMPTY

    public_key = _read_key_file(public_path)
    if public_key is None:
        status |= LoadStatus.PUBLIC_MISSING
    private_key = _read_key_file(private_path)
    if private_key is None:
        status |= LoadStatus.PRIVATE_MISSING

    return KeyPair(public_key=public_key, private_key=private_key), status
