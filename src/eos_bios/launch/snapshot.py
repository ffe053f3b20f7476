"""
Snapshot of balances to preload at launch.

The snapshot is a headerless CSV with one account per line::

    0x00000000000000000000000000000000000001,genesis11111,EOS6MRyAjQ...,1000.0000 EOS
"""

from __future__ import annotations

import csv
import io
from collections.abc import Iterator
from dataclasses import dataclass

from eos_bios.crypto import PublicKey
from eos_bios.types import KeyFormatError, is_valid_account_name


@dataclass(frozen=True, slots=True)
class SnapshotLine:
    """One preloaded account."""

    eth_address: str
    """Address the balance was registered from."""

    account_name: str
    """Account to create on the new chain."""

    public_key: str
    """Owner and active key of the account."""

    balance: str
    """Asset string, e.g. ``"1000.0000 EOS"``."""


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Immutable table of preloaded accounts, in file order."""

    lines: tuple[SnapshotLine, ...] = ()

    def __len__(self) -> int:
        return len(self.lines)

    def __iter__(self) -> Iterator[SnapshotLine]:
        return iter(self.lines)

    def head(self, count: int) -> tuple[SnapshotLine, ...]:
        """The first ``count`` lines, or every line when ``count`` is 0."""
        if count <= 0:
            return self.lines
        return self.lines[:count]

    @classmethod
    def from_csv(cls, data: bytes) -> Snapshot:
        """
        Parse snapshot CSV content.

        Raises:
            ValueError: On a malformed line, with its line number.
        """
        reader = csv.reader(io.StringIO(data.decode("utf-8")))
        lines = []
        for number, row in enumerate(reader, start=1):
            if not row or all(not cell.strip() for cell in row):
                continue
            if len(row) != 4:
                raise ValueError(f"line {number}: expected 4 columns, got {len(row)}")

            eth_address, account_name, public_key, balance = (cell.strip() for cell in row)
            if not is_valid_account_name(account_name):
                raise ValueError(f"line {number}: invalid account name {account_name!r}")
            try:
                PublicKey.from_string(public_key)
            except KeyFormatError as exc:
                raise ValueError(f"line {number}: {exc.message}") from exc

            lines.append(
                SnapshotLine(
                    eth_address=eth_address,
                    account_name=account_name,
                    public_key=public_key,
                    balance=balance,
                )
            )
        return cls(lines=tuple(lines))
