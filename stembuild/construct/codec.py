"""PowerShell -EncodedCommand codec.

powershell.exe accepts a script as base64 of its UTF-16LE bytes. Encoding
this way keeps quotes, pipes and ``$()`` out of reach of any shell or
argument splitting between us and the guest.
"""

import base64


def encode_powershell_command(command: str) -> str:
    """Return *command* as base64-encoded UTF-16LE text.

    Characters outside the BMP become surrogate pairs, as powershell.exe
    expects. The result only uses the standard base64 alphabet plus padding.
    """
    return base64.b64encode(command.encode("utf-16-le")).decode("ascii")


def decode_powershell_command(encoded: str) -> str:
    """Inverse of encode_powershell_command()."""
    return base64.b64decode(encoded, validate=True).decode("utf-16-le")
