"""Boot node duties: booting the chain and handing off the ephemeral key."""

from .executor import BootSequenceExecutor

__all__ = [
    "BootSequenceExecutor",
]
