"""
Identifier helpers for document-store records.

Document ids are assigned from per-collection counters at insert time (see
``repositories.mongo``). The legacy derivation below reproduces the numeric
ids the previous deployment exposed: last six hex characters of the ObjectId,
reduced modulo 1,000,000. It is lossy, so it is only used to carry old ids
forward when importing legacy data, and only after checking for collisions.
"""
from __future__ import annotations

import re
from collections import defaultdict
from typing import Dict, Iterable, List

LEGACY_ID_HEX_DIGITS = 6
LEGACY_ID_MODULUS = 1_000_000

_HEX_SUFFIX = re.compile(r"[0-9a-fA-F]{%d}$" % LEGACY_ID_HEX_DIGITS)


def legacy_numeric_id(native_id) -> int:
    """Derive the legacy integer id from a native identifier.

    Accepts an ``ObjectId`` or anything whose ``str()`` ends in six hex digits.
    Raises ``ValueError`` otherwise.
    """
    text = str(native_id)
    match = _HEX_SUFFIX.search(text)
    if not match:
        raise ValueError(f"Native id {text!r} does not end in {LEGACY_ID_HEX_DIGITS} hex characters")
    return int(match.group(0), 16) % LEGACY_ID_MODULUS


def find_legacy_id_collisions(native_ids: Iterable) -> Dict[int, List[str]]:
    """Group distinct native ids that map to the same legacy id.

    Returns only the colliding groups, keyed by legacy id, each listing the
    native ids as strings in input order. Duplicate native ids are ignored.
    """
    groups: Dict[int, List[str]] = defaultdict(list)
    for native_id in native_ids:
        text = str(native_id)
        bucket = groups[legacy_numeric_id(text)]
        if text not in bucket:
            bucket.append(text)
    return {legacy: members for legacy, members in groups.items() if len(members) > 1}
