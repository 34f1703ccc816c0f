"""
Phenotype Mapper - Diplotype resolution and phenotype determination.

Each star allele carries a fixed activity score; the diplotype score is the
sum of both alleles and maps to a metabolizer phenotype by fixed thresholds.
Pure functions, no I/O.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from .models import (
    GAIN_OF_FUNCTION_ALLELES,
    LOSS_OF_FUNCTION_ALLELES,
    REDUCED_FUNCTION_ALLELES,
    REFERENCE_ALLELE,
    UNKNOWN_DIPLOTYPE,
    Phenotype,
)

if TYPE_CHECKING:
    from genorisk.services.vcf.variant_extractor import GeneEvidence

logger = logging.getLogger(__name__)

UNKNOWN_SCORE = -1.0


def allele_score(star: str) -> float:
    """
    Activity score of a single star allele.

    Alleles outside the loss/reduced/gain buckets score as unknown (-1),
    except the reference allele *1.
    """
    if star in LOSS_OF_FUNCTION_ALLELES:
        return 0.0
    if star in REDUCED_FUNCTION_ALLELES:
        return 0.5
    if star in GAIN_OF_FUNCTION_ALLELES:
        return 2.0
    if star == REFERENCE_ALLELE:
        return 1.0
    return UNKNOWN_SCORE


def score_to_phenotype(total: float) -> Phenotype:
    if total == 0:
        return Phenotype.PM
    if total <= 1:
        return Phenotype.IM
    if total <= 2:
        return Phenotype.NM
    if total <= 3:
        return Phenotype.RM
    return Phenotype.URM


def infer_phenotype(diplotype: str) -> Phenotype:
    """Map an ``A1/A2`` diplotype string to a metabolizer phenotype."""
    parts = [p.strip() for p in (diplotype or "").split("/")]
    if len(parts) != 2:
        return Phenotype.UNKNOWN

    s1, s2 = allele_score(parts[0]), allele_score(parts[1])
    if s1 < 0 or s2 < 0:
        return Phenotype.UNKNOWN

    return score_to_phenotype(s1 + s2)


def resolve_diplotype(evidence: Optional[GeneEvidence]) -> str:
    """
    First two distinct alleles in first-seen order; a single allele is
    self-paired; no alleles gives the unknown placeholder pair.
    """
    if evidence is None or not evidence.star_alleles:
        return UNKNOWN_DIPLOTYPE
    alleles = evidence.star_alleles
    if len(alleles) == 1:
        return f"{alleles[0]}/{alleles[0]}"
    if len(alleles) > 2:
        logger.debug(
            "%s has %d alleles; using first two of %s", evidence.gene, len(alleles), alleles
        )
    return f"{alleles[0]}/{alleles[1]}"
