"""
Allele tables for the expression chromosome.

Digits 0-9 are encoded as their 4-bit binary value and the four arithmetic
operators as 2-bit patterns. Any 4-bit pattern above 1001 has no meaning and
decodes to the junk marker.
"""

from typing import Dict, Tuple

Bit = int
BitTuple = Tuple[Bit, ...]

DIGIT_GENE_WIDTH = 4
OPERATOR_GENE_WIDTH = 2

JUNK_SYMBOL = "(junk)"

DIGIT_ALLELES: Dict[BitTuple, str] = {
    (0, 0, 0, 0): "0",
    (0, 0, 0, 1): "1",
    (0, 0, 1, 0): "2",
    (0, 0, 1, 1): "3",
    (0, 1, 0, 0): "4",
    (0, 1, 0, 1): "5",
    (0, 1, 1, 0): "6",
    (0, 1, 1, 1): "7",
    (1, 0, 0, 0): "8",
    (1, 0, 0, 1): "9",
}

OPERATOR_ALLELES: Dict[BitTuple, str] = {
    (0, 0): "+",
    (0, 1): "-",
    (1, 0): "*",
    (1, 1): "/",
}

# Operator gene prepended by the cleaner so every digit has a partner.
PLUS_ALLELE: BitTuple = (0, 0)

DIGIT_SYMBOLS = frozenset(DIGIT_ALLELES.values())
OPERATOR_SYMBOLS = frozenset(OPERATOR_ALLELES.values())
