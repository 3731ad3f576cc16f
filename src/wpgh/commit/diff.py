"""Snapshot differ: pair after-state with before-state per asset."""

from __future__ import annotations

from collections.abc import Sequence

from wpgh.assets.models import ChangeRecord, Snapshot


def diff(identifiers: Sequence[str], before: Snapshot, after: Snapshot) -> list[ChangeRecord]:
    """Return one ChangeRecord per requested asset that exists in *after*.

    Ordered by *after*, not by *identifiers*. Assets missing from *after*
    (failed install, typo) are dropped.
    """
    requested = set(identifiers)
    return [
        ChangeRecord(identifier=identifier, after=asset, before=before.get(identifier))
        for identifier, asset in after.items()
        if identifier in requested
    ]
