"""Engine-wide constants.

Centralizes the fixed-point scales and protocol bounds shared by both curves.
"""

# Canonical fixed-point domain: every reserve is rescaled to 18 decimals
CANONICAL_DECIMALS = 18

# Swap fees are expressed in parts per FEE_DENOMINATOR (3 == 0.3%)
FEE_DENOMINATOR = 1000
MAX_SWAP_FEE = 100

# Hybrid amplifier is stored scaled by AMP_PRECISION, so A=100 means 1.0
AMP_PRECISION = 100
MIN_AMPLIFIER = AMP_PRECISION

# Spot prices are returned as Q104 binary fixed point
PRICE_PRECISION = 104

# Parameter blob layout: two decimals bytes followed by a 240-bit field
DATA_LENGTH = 32
HEADER_LENGTH = 2
FIELD_BITS = (DATA_LENGTH - HEADER_LENGTH) * 8

# Weighted curve packs two 8-bit weights into the low 16 bits of the field
WEIGHT_BITS = 8
