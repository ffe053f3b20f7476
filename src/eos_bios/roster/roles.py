"""Role assignment from the roster."""

from __future__ import annotations

import logging
from enum import Enum

from .builder import Roster
from .peer import Peer

logger = logging.getLogger(__name__)


class Role(Enum):
    """What a node does during the launch."""

    BOOT_NODE = "boot_node"
    """Runs the boot sequence with an ephemeral key, then discloses it."""

    APPOINTED_BLOCK_PRODUCER = "appointed_block_producer"
    """Produces blocks after launch and verifies the boot node's work."""

    PARTICIPANT = "participant"
    """Joins the network and trusts the appointed producers' verification."""


def is_boot_node(roster: Roster, account_name: str) -> bool:
    """Whether ``account_name`` holds roster index 0."""
    return roster.boot_node.account_name == account_name


def is_appointed_producer(roster: Roster, account_name: str) -> bool:
    """Whether ``account_name`` holds one of the roster indices 1..21."""
    return any(peer.account_name == account_name for peer in roster.appointed_producers)


def resolve_role(roster: Roster, account_name: str) -> Role:
    """Map a local identity to exactly one role."""
    if is_boot_node(roster, account_name):
        return Role.BOOT_NODE
    if is_appointed_producer(roster, account_name):
        return Role.APPOINTED_BLOCK_PRODUCER
    return Role.PARTICIPANT


def my_peers(roster: Roster, local: Peer) -> list[Peer]:
    """
    Roster entries the local node answers for.

    When the network is smaller than the schedule, the local node appears
    several times under clone names; a single running node produces for all
    of them. The local peer comes first, followed by every roster entry
    declaring the same discovery account, clones included.
    """
    account = local.discovery.eosio_account_name
    return [local] + [peer for peer in roster if peer.discovery.eosio_account_name == account]


def log_shuffling_results(roster: Roster, role: Role) -> None:
    """Log the final schedule and what it means for this node."""
    logger.info("SHUFFLING RESULTS")
    logger.info("BIOS NODE: %s", roster.boot_node.account_name)
    for index, peer in enumerate(roster.appointed_producers, start=1):
        logger.info("ABP %02d:    %s", index, peer.account_name)

    match role:
        case Role.BOOT_NODE:
            logger.info("I AM THE BOOT NODE! Let's get the ball rolling.")
        case Role.APPOINTED_BLOCK_PRODUCER:
            logger.info(
                "I am NOT the BOOT NODE, but I AM ONE of the Appointed Block Producers. "
                "Stay tuned and watch the Boot node's media properties."
            )
        case Role.PARTICIPANT:
            logger.info(
                "Okay... I'm not part of the Appointed Block Producers, "
                "we'll wait and be ready to join"
            )
