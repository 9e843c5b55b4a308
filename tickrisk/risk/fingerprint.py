"""tickrisk – Content fingerprint of risk-affecting member state.

The risk engine compares fingerprints to decide whether a cached risk
value is still valid. The digest covers every input to the risk
computation: member order, identifiers, return histories, stored
averages and market values. Series registered by reference can be
pushed to from outside the engine, so the digest is taken over content
rather than tracked through engine mutations.

The hex digest is an internal token and not a stable format.
"""

from __future__ import annotations

import hashlib
from typing import Iterable

import numpy as np

from tickrisk.risk.types import MemberRecord


def fingerprint_members(members: Iterable[MemberRecord]) -> str:
    """Return a hex digest of the given members in iteration order."""

    h = hashlib.blake2b(digest_size=20)
    for record in members:
        series = record.series
        history, average = series.state()
        returns = np.asarray(history, dtype=np.float64)

        ident = series.identifier.encode("utf-8")
        h.update(len(ident).to_bytes(4, "big"))
        h.update(ident)
        h.update(len(returns).to_bytes(8, "big"))
        h.update(returns.tobytes())
        h.update(np.asarray([average, record.value], dtype=np.float64).tobytes())
    return h.hexdigest()
