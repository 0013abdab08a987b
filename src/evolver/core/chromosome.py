"""
Chromosome Representation for the Expression Genetic Algorithm.

This module defines the binary genes that make up an expression chromosome,
their classification and decoding against the allele tables, the cleaning
step that turns a raw chromosome into an evaluable expression, and the
crossover and mutation operators used by the engine.
"""

from typing import List, Dict, Any, Optional, Sequence, Tuple, Iterator
from dataclasses import dataclass, field
from enum import Enum
import random
import hashlib

from src.evolver.core.alleles import (
    BitTuple,
    DIGIT_ALLELES,
    OPERATOR_ALLELES,
    DIGIT_GENE_WIDTH,
    OPERATOR_GENE_WIDTH,
    JUNK_SYMBOL,
    PLUS_ALLELE,
)


class GeneType(Enum):
    """Types of genes in the expression chromosome."""
    DIGIT = "digit"
    OPERATOR = "operator"
    JUNK = "junk"


def _classify_bits(bits: BitTuple) -> GeneType:
    # Width decides which table applies; unknown widths are junk.
    if len(bits) == DIGIT_GENE_WIDTH:
        return GeneType.DIGIT if bits in DIGIT_ALLELES else GeneType.JUNK
    if len(bits) == OPERATOR_GENE_WIDTH:
        return GeneType.OPERATOR if bits in OPERATOR_ALLELES else GeneType.JUNK
    return GeneType.JUNK


@dataclass(frozen=True)
class Gene:
    """
    A fixed-width tuple of bits.

    The gene type is derived once from the bit pattern: four-bit genes are
    checked against the digit alleles and two-bit genes against the operator
    alleles. Anything else is junk.
    """
    bits: BitTuple
    gene_type: GeneType = field(init=False, compare=False)

    def __post_init__(self):
        bits = tuple(int(b) for b in self.bits)
        if any(b not in (0, 1) for b in bits):
            raise ValueError(f"Gene bits must be 0 or 1, got {self.bits!r}")
        object.__setattr__(self, "bits", bits)
        object.__setattr__(self, "gene_type", _classify_bits(bits))

    @property
    def value(self) -> str:
        """Decoded symbol of this gene, or the junk marker."""
        if self.gene_type == GeneType.DIGIT:
            return DIGIT_ALLELES[self.bits]
        if self.gene_type == GeneType.OPERATOR:
            return OPERATOR_ALLELES[self.bits]
        return JUNK_SYMBOL

    @property
    def is_junk(self) -> bool:
        return self.gene_type == GeneType.JUNK

    @property
    def width(self) -> int:
        return len(self.bits)

    def to_string(self) -> str:
        return "".join(str(b) for b in self.bits)

    @classmethod
    def from_string(cls, text: str) -> "Gene":
        """Create a gene from a string such as ``"0110"``."""
        if any(ch not in "01" for ch in text):
            raise ValueError(f"Invalid gene string: {text!r}")
        return cls(tuple(int(ch) for ch in text))

    @classmethod
    def random_digit(cls, rng: random.Random) -> "Gene":
        """Draw a uniformly random four-bit gene (may be junk)."""
        return cls(tuple(_random_bit(rng) for _ in range(DIGIT_GENE_WIDTH)))

    @classmethod
    def random_operator(cls, rng: random.Random) -> "Gene":
        """Draw a uniformly random two-bit operator gene."""
        return cls(tuple(_random_bit(rng) for _ in range(OPERATOR_GENE_WIDTH)))

    def __repr__(self) -> str:
        return f"Gene({self.to_string()}={self.value})"


def _random_bit(rng: random.Random) -> int:
    return 0 if rng.random() < 0.5 else 1


def classify(gene: Gene) -> GeneType:
    """Classify a gene as a digit, operator or junk gene."""
    return gene.gene_type


def decode(gene: Gene) -> str:
    """Decode a gene to its symbol ("0".."9", "+", "-", "*", "/" or "(junk)")."""
    return gene.value


class Chromosome:
    """
    Chromosome representing a candidate arithmetic expression.

    A chromosome is an ordered, immutable sequence of genes. Freshly created
    chromosomes interleave digit and operator genes, starting and ending
    with a digit gene; after mutation any gene may decode to junk, which is
    dealt with by :meth:`clean`.
    """

    def __init__(self, genes: Optional[Sequence[Gene]] = None):
        """Initialize chromosome with genes."""
        self.genes: Tuple[Gene, ...] = tuple(genes or ())

    @property
    def chromosome_id(self) -> str:
        """Content hash of the chromosome's bits."""
        content = " ".join(g.to_string() for g in self.genes)
        return hashlib.sha256(content.encode()).hexdigest()[:16]

    @property
    def bit_length(self) -> int:
        return sum(g.width for g in self.genes)

    def bits(self) -> List[int]:
        """Flattened bits of every gene, in order."""
        return [b for gene in self.genes for b in gene.bits]

    def phenotype(self) -> str:
        """Space-joined symbols of every gene, junk markers included."""
        return " ".join(gene.value for gene in self.genes)

    def clean(self) -> "Chromosome":
        """
        Remove junk digits together with the operator in front of them.

        A synthetic "+" gene is prepended so that every digit gene has a
        preceding operator gene. The genes are then read as (operator, digit)
        pairs; a trailing unpaired gene is dropped, as is any pair that does
        not hold an operator followed by a valid digit. Finally the synthetic
        leading operator is removed again.

        Returns:
            A new chromosome whose phenotype is ``digit (operator digit)*``
            or empty.
        """
        genes = [Gene(PLUS_ALLELE), *self.genes]
        pairs = [(genes[i], genes[i + 1]) for i in range(0, len(genes) - 1, 2)]

        kept: List[Gene] = []
        for operator, digit in pairs:
            if operator.gene_type == GeneType.OPERATOR and digit.gene_type == GeneType.DIGIT:
                kept.extend((operator, digit))

        return Chromosome(kept[1:])

    def clean_phenotype(self) -> str:
        """Phenotype of the cleaned chromosome; always a valid expression or empty."""
        return self.clean().phenotype()

    def crossover(
        self,
        other: "Chromosome",
        crossover_rate: float,
        rng: random.Random
    ) -> Tuple["Chromosome", "Chromosome"]:
        """
        Single-point crossover with another chromosome.

        Args:
            other: The second parent
            crossover_rate: Probability that a cut happens at all
            rng: Source of randomness

        Returns:
            Two children. Without a cut these are the parents themselves.
        """
        if rng.random() < crossover_rate:
            position = int(rng.random() * len(self))
            child1 = Chromosome(self.genes[:position] + other.genes[position:])
            child2 = Chromosome(other.genes[:position] + self.genes[position:])
            return child1, child2

        return self, other

    def mutate(self, mutation_rate: float, rng: random.Random) -> "Chromosome":
        """
        Flip each bit of each gene independently with ``mutation_rate``.

        Gene validity is not considered: junk genes mutate like any other,
        and a mutated gene may become junk.
        """
        return Chromosome([
            Gene(tuple(1 - bit if rng.random() < mutation_rate else bit for bit in gene.bits))
            for gene in self.genes
        ])

    @classmethod
    def random(cls, length: int, rng: random.Random) -> "Chromosome":
        """
        Create a random chromosome.

        ``length // 2`` digit genes are interleaved with one fewer operator
        genes, so the chromosome starts and ends with a digit gene.

        Args:
            length: Requested chromosome length, at least 2
            rng: Source of randomness
        """
        num_digits = length // 2
        if num_digits < 1:
            raise ValueError(f"Chromosome length {length} cannot hold a digit gene")

        digits = [Gene.random_digit(rng) for _ in range(num_digits)]
        operators = [Gene.random_operator(rng) for _ in range(num_digits - 1)]

        genes: List[Gene] = []
        for digit, operator in zip(digits, operators):
            genes.extend((digit, operator))
        genes.append(digits[-1])

        return cls(genes)

    @classmethod
    def from_string(cls, text: str) -> "Chromosome":
        """Create a chromosome from whitespace-separated gene bit strings."""
        return cls([Gene.from_string(part) for part in text.split()])

    def to_dict(self) -> Dict[str, Any]:
        """Convert chromosome to dictionary representation."""
        return {
            "chromosome_id": self.chromosome_id,
            "genes": [g.to_string() for g in self.genes],
            "phenotype": self.phenotype()
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Chromosome":
        """Create chromosome from dictionary representation."""
        return cls([Gene.from_string(g) for g in data.get("genes", [])])

    def __len__(self) -> int:
        return len(self.genes)

    def __iter__(self) -> Iterator[Gene]:
        return iter(self.genes)

    def __getitem__(self, index: int) -> Gene:
        return self.genes[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Chromosome):
            return NotImplemented
        return self.genes == other.genes

    def __hash__(self) -> int:
        return hash(self.genes)

    def __repr__(self) -> str:
        """String representation of chromosome."""
        return f"Chromosome(id={self.chromosome_id[:8]}, genes={len(self.genes)}, phenotype={self.phenotype()!r})"
