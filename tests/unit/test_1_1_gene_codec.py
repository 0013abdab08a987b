"""
Unit tests for the allele tables and gene codec.

Tests cover:
- Digit gene decoding for every 4-bit pattern
- Operator gene decoding for every 2-bit pattern
- Junk classification for invalid and unexpected-width genes
- Gene construction helpers
"""

import pytest

from src.evolver import Gene, GeneType, classify, decode
from src.evolver.core.alleles import DIGIT_ALLELES, OPERATOR_ALLELES, JUNK_SYMBOL


def _bits(value: int, width: int):
    return tuple(int(ch) for ch in format(value, f"0{width}b"))


class TestDigitGenes:
    """Test suite for 4-bit genes."""

    @pytest.mark.parametrize("value", range(10))
    def test_valid_digit_patterns_decode_to_their_value(self, value):
        """Patterns 0000..1001 decode to the digit matching their binary value."""
        gene = Gene(_bits(value, 4))

        assert classify(gene) == GeneType.DIGIT
        assert decode(gene) == str(value)

    @pytest.mark.parametrize("value", range(10, 16))
    def test_high_patterns_are_junk(self, value):
        """Patterns 1010..1111 have no digit and are junk."""
        gene = Gene(_bits(value, 4))

        assert classify(gene) == GeneType.JUNK
        assert decode(gene) == JUNK_SYMBOL
        assert gene.is_junk

    def test_allele_table_is_complete(self):
        """The digit table holds exactly the ten digits."""
        assert sorted(DIGIT_ALLELES.values()) == [str(d) for d in range(10)]


class TestOperatorGenes:
    """Test suite for 2-bit genes."""

    @pytest.mark.parametrize("bits,symbol", [
        ((0, 0), "+"),
        ((0, 1), "-"),
        ((1, 0), "*"),
        ((1, 1), "/"),
    ])
    def test_operator_mapping(self, bits, symbol):
        """Each 2-bit pattern maps to its fixed operator."""
        gene = Gene(bits)

        assert classify(gene) == GeneType.OPERATOR
        assert decode(gene) == symbol

    def test_no_two_bit_gene_is_junk(self):
        """All four 2-bit patterns are assigned."""
        genes = [Gene(_bits(v, 2)) for v in range(4)]

        assert not any(g.is_junk for g in genes)
        assert len(OPERATOR_ALLELES) == 4


class TestUnexpectedWidths:
    """Genes of any width other than 2 or 4 are junk."""

    @pytest.mark.parametrize("bits", [(), (1,), (0, 0, 0), (0, 0, 0, 0, 0), (1, 0, 1, 0, 1, 0)])
    def test_unexpected_width_is_junk(self, bits):
        gene = Gene(bits)

        assert classify(gene) == GeneType.JUNK
        assert decode(gene) == JUNK_SYMBOL


class TestGeneConstruction:
    """Test suite for gene helpers."""

    def test_from_string(self):
        """Genes can be written as bit strings."""
        gene = Gene.from_string("0110")

        assert gene.bits == (0, 1, 1, 0)
        assert gene.value == "6"
        assert gene.to_string() == "0110"

    def test_from_string_rejects_other_characters(self):
        with pytest.raises(ValueError):
            Gene.from_string("01a0")

    def test_bits_must_be_binary(self):
        with pytest.raises(ValueError):
            Gene((0, 2))

    def test_genes_compare_by_bits(self):
        """Two genes with the same bits are equal and hash alike."""
        assert Gene((0, 1)) == Gene.from_string("01")
        assert len({Gene((0, 1)), Gene((0, 1)), Gene((1, 0))}) == 2

    def test_random_genes_have_fixed_widths(self, rng):
        """Random digit genes are 4 bits, random operator genes 2 bits."""
        for _ in range(50):
            assert Gene.random_digit(rng).width == 4
            operator = Gene.random_operator(rng)
            assert operator.width == 2
            assert operator.gene_type == GeneType.OPERATOR
