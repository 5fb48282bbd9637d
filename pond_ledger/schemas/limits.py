"""
Upper bounds for numeric request fields.

Money is stored in 64-bit integer columns. A single amount is capped
at MAX_AMOUNT, and a sale total (MAX_WEIGHT_KG x MAX_AMOUNT at most)
still fits in a signed 64-bit integer.
"""

# Largest money figure accepted in any one field, in currency units.
MAX_AMOUNT = 10**12

# Largest weight recorded on a single sale.
MAX_WEIGHT_KG = 1_000_000
