"""Non-boot node duties: joining the network and verifying the handoff."""

from .config import SYNC_POLL_INTERVAL
from .flow import JoinVerifyFlow
from .handoff import await_handoff, verify_handoff_key

__all__ = [
    "JoinVerifyFlow",
    "SYNC_POLL_INTERVAL",
    "await_handoff",
    "verify_handoff_key",
]
