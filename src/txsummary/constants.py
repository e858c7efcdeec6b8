"""
Chia unit defaults and transaction summary display constants.

Sort keys define the presentation order of asset groups in the spent and
created lists. They are part of the display contract, do not renumber.
"""

from __future__ import annotations

# 1 XCH = 10^12 mojos
XCH_TICKER = "XCH"
XCH_DECIMALS = 12

# CAT amounts are always denominated with 3 decimal places
CAT_DECIMALS = 3
CAT_TICKER_FALLBACK = "CAT"

DEFAULT_LOCALE = "en-US"

# Display order of asset groups
FEE_SORT_KEY = 0
XCH_SORT_KEY = 1
CAT_SORT_KEY = 2
DID_SORT_KEY = 3
NFT_SORT_KEY = 4
OPTION_SORT_KEY = 5
UNKNOWN_SORT_KEY = 99

# Badges
XCH_BADGE = "Chia"
CAT_BADGE_PREFIX = "CAT"
DID_BADGE = "Profile"
NFT_BADGE = "NFT"
OPTION_BADGE = "Option"
UNKNOWN_BADGE = "Unknown"
FEE_BADGE = "Fee"

# Placeholders for missing names
UNNAMED = "Unnamed"
UNKNOWN_NAME = "Unknown"
UNTITLED = "Untitled"

# Destination labels
BURN_LABEL = "Permanently Burned"
OWN_LABEL = "You"
UNKNOWN_ADDRESS_LABEL = "Unknown"

# Unit suffix for coins of unrecognized kind
RAW_UNIT = "mojos"
