"""Message-key verification and its findings."""

from .findings import EnumTypeRef, ErrorBuilder, ErrorKind, ErrorRecord
from .message_key_verifier import MessageKeyVerifier

__all__ = [
    "EnumTypeRef",
    "ErrorBuilder",
    "ErrorKind",
    "ErrorRecord",
    "MessageKeyVerifier",
]
