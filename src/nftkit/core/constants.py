"""
Single source of truth for nftkit defaults and numeric bounds.

Notes:
    - Validators in nftkit.core.validators and settings in nftkit.submit.config read
      these values; change defaults here rather than at the call sites.
    - Stdlib only, no side effects.
"""

from __future__ import annotations

from typing import Final

__all__ = [
    "DEFAULT_FAMILY",
    "DEFAULT_CHAIN_TYPE",
    "DEFAULT_CHAIN_PRIORITY",
    "DEFAULT_NFT_PATH",
    "DEFAULT_SUBMIT_TIMEOUT",
    "PORT_MIN",
    "PORT_MAX",
    "VLAN_ID_MAX",
    "VLAN_PCP_MAX",
    "DSCP_MAX",
    "TTL_MAX",
    "MARK_MAX",
    "PRIORITY_MIN",
    "PRIORITY_MAX",
]

DEFAULT_FAMILY: Final[str] = "inet"
DEFAULT_CHAIN_TYPE: Final[str] = "filter"
DEFAULT_CHAIN_PRIORITY: Final[int] = 0

# Submission
DEFAULT_NFT_PATH: Final[str] = "nft"
DEFAULT_SUBMIT_TIMEOUT: Final[float] = 5.0  # seconds

# Field bounds
PORT_MIN: Final[int] = 0
PORT_MAX: Final[int] = 65535
VLAN_ID_MAX: Final[int] = 4095
VLAN_PCP_MAX: Final[int] = 7
DSCP_MAX: Final[int] = 63
TTL_MAX: Final[int] = 255
MARK_MAX: Final[int] = 2**32 - 1
PRIORITY_MIN: Final[int] = -(2**31)
PRIORITY_MAX: Final[int] = 2**31 - 1
