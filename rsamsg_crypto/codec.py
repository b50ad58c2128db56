"""Text armor for raw ciphertext.

Wire format::

    -----BEGIN ENCODED MESSAGE-----
    <standard base64, 40 characters per line>
    -----END ENCODED MESSAGE-----

Unwrapping drops every line containing '-' (header, footer, comments) and
base64-decodes the rest. Standard base64 never contains '-'; switching to the
URL-safe alphabet would break this rule and is a wire-format change.
"""

import base64
import binascii

from .errors import MessageDecodeError

MESSAGE_HEADER = '-----BEGIN ENCODED MESSAGE-----'
MESSAGE_FOOTER = '-----END ENCODED MESSAGE-----'
MESSAGE_LINE_LENGTH = 40


def _line_wrap(text: str, line_length: int) -> str:
    return '\n'.join(text[i:i + line_length] for i in range(0, len(text), line_length))


def wrap_message(cipher_bytes: bytes) -> str:
    b64 = base64.b64encode(cipher_bytes).decode('ascii')
    return f"{MESSAGE_HEADER}\n{_line_wrap(b64, MESSAGE_LINE_LENGTH)}\n{MESSAGE_FOOTER}\n"


def unwrap_message(text: str) -> bytes:
    """Recover raw ciphertext from an encoded message.

    Raises MessageDecodeError if the remaining text is not valid base64.
    """
    b64 = ''.join(line.strip() for line in text.split('\n') if '-' not in line)
    try:
        return base64.b64decode(b64, validate=True)
    except (binascii.Error, ValueError) as e:
        raise MessageDecodeError("base64 decoding of message failed") from e
