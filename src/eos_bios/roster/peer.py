"""Launch participants as described by their discovery files."""

from __future__ import annotations

from pydantic import Field

from eos_bios.types import FrozenModel


class Discovery(FrozenModel):
    """
    Self-published description of a network participant.

    Only the fields the orchestration uses are modelled; discovery files may
    carry more, which are ignored.
    """

    eosio_account_name: str
    """Account name the participant will hold on the new chain."""

    eosio_abp_signing_key: str = ""
    """Block signing public key used if the participant is appointed producer."""

    organization_name: str = ""
    """Display name of the operating organization."""

    website: str = ""
    """Main website, where launch announcements may be posted."""

    social_twitter: str = ""
    social_facebook: str = ""
    social_telegram: str = ""
    social_slack: str = ""
    social_steem: str = ""
    social_steemit: str = ""
    social_keybase: str = ""
    social_wechat: str = ""
    social_youtube: str = ""
    social_github: str = ""

    target_p2p_address: str = ""
    """host:port other nodes dial to join this participant's mesh."""

    target_http_address: str = ""
    """Public HTTP API endpoint of the participant's node."""

    def contact_points(self) -> list[tuple[str, str]]:
        """
        Non-empty public announcement channels, in display order.

        Returns:
            (label, value) pairs for the website and each social handle set.
        """
        points = [
            ("Main website", self.website),
            ("Twitter", self.social_twitter),
            ("Facebook", self.social_facebook),
            ("Telegram", self.social_telegram),
            ("Slack", self.social_slack),
            ("Steem", self.social_steem),
            ("SteemIt", self.social_steemit),
            ("Keybase", self.social_keybase),
            ("WeChat", self.social_wechat),
            ("YouTube", self.social_youtube),
            ("GitHub", self.social_github),
        ]
        return [(label, value) for label, value in points if value]


class Peer(FrozenModel):
    """
    One candidate launch participant.

    A peer is either real (one per discovery file) or a clone: a synthetic
    duplicate of a real peer, under a derived account name, used to fill the
    producer schedule when the network has fewer participants than slots.
    """

    discovery: Discovery
    """Discovery record; clones share their source's record."""

    cloned_account_name: str | None = Field(default=None)
    """Derived account name when this peer is a clone, else None."""

    @property
    def account_name(self) -> str:
        """Account name this roster entry produces under."""
        if self.cloned_account_name is not None:
            return self.cloned_account_name
        return self.discovery.eosio_account_name

    @property
    def is_clone(self) -> bool:
        """Whether this peer is a synthetic roster filler."""
        return self.cloned_account_name is not None

    def same_identity(self, other: Peer) -> bool:
        """
        Compare identities by account name.

        Unlike ``==``, differing discovery metadata is ignored. A clone never
        shares an identity with its source, since its account name differs.
        """
        return self.account_name == other.account_name
