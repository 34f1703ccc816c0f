from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict

from genorisk.services.pharmacogenomics.models import (
    GAIN_OF_FUNCTION_ALLELES,
    LOSS_OF_FUNCTION_ALLELES,
    REDUCED_FUNCTION_ALLELES,
    SUPPORTED_GENES,
    UNKNOWN_ALLELE,
    VariantEffect,
    Zygosity,
)
from .parser import ParsedFile

logger = logging.getLogger(__name__)

GENE_TAG = "GENE"
STAR_TAG = "STAR"
RSID_TAG = "RS"
RSID_PREFIX = "rs"
MISSING_ID = "."


class DetectedVariant(BaseModel):
    model_config = ConfigDict(frozen=True)

    rsid: str
    star_allele: str
    zygosity: Zygosity
    effect: VariantEffect


@dataclass
class GeneEvidence:
    """Per-gene evidence; allele and rsid lists are insertion-ordered and distinct."""
    gene: str
    star_alleles: List[str] = field(default_factory=list)
    rsids: List[str] = field(default_factory=list)
    variants: List[DetectedVariant] = field(default_factory=list)

    def add_star_allele(self, star: str) -> None:
        if star and star not in self.star_alleles:
            self.star_alleles.append(star)

    def add_rsid(self, rsid: str) -> None:
        if rsid and rsid != MISSING_ID and rsid not in self.rsids:
            self.rsids.append(rsid)


_EFFECT_TABLE: Dict[str, VariantEffect] = {
    **{a: VariantEffect.LOSS_OF_FUNCTION for a in LOSS_OF_FUNCTION_ALLELES},
    **{a: VariantEffect.REDUCED_FUNCTION for a in REDUCED_FUNCTION_ALLELES},
    **{a: VariantEffect.GAIN_OF_FUNCTION for a in GAIN_OF_FUNCTION_ALLELES},
}


def infer_effect(star: Optional[str]) -> VariantEffect:
    """Functional effect of a star allele; *1 and unlisted alleles are unknown."""
    return _EFFECT_TABLE.get(star or "", VariantEffect.UNKNOWN)


def infer_zygosity(genotype: Optional[str]) -> Zygosity:
    """
    Homozygous only when both allele indices are present, equal and
    non-reference. Everything else, including a missing call, is heterozygous.
    """
    if not genotype:
        return Zygosity.HETEROZYGOUS
    alleles = genotype.replace("|", "/").split("/")
    if len(alleles) == 2 and alleles[0] == alleles[1] and alleles[0] not in ("0", ".", ""):
        return Zygosity.HOMOZYGOUS
    return Zygosity.HETEROZYGOUS


def normalize_rsid(rsid: str) -> str:
    """Prefix a bare dbSNP number with "rs"; the missing-ID placeholder is kept as is."""
    if not rsid or rsid == MISSING_ID or rsid.startswith(RSID_PREFIX):
        return rsid or MISSING_ID
    return f"{RSID_PREFIX}{rsid}"


def extract_gene_evidence(parsed: ParsedFile) -> Dict[str, GeneEvidence]:
    """
    Group parsed records by supported gene.

    Records without a GENE tag, or tagged with a gene outside the supported
    set, contribute nothing.
    """
    out: Dict[str, GeneEvidence] = {}
    skipped = 0

    for record in parsed.variants:
        gene = (record.info.get(GENE_TAG) or "").upper()
        if gene not in SUPPORTED_GENES:
            skipped += 1
            continue

        evidence = out.setdefault(gene, GeneEvidence(gene=gene))
        star = record.info.get(STAR_TAG) or ""
        rsid = record.info.get(RSID_TAG) or record.id or ""

        evidence.add_star_allele(star)
        evidence.add_rsid(rsid)

        evidence.variants.append(
            DetectedVariant(
                rsid=normalize_rsid(rsid),
                star_allele=star or UNKNOWN_ALLELE,
                zygosity=infer_zygosity(record.genotype),
                effect=infer_effect(star),
            )
        )

    logger.info(
        "Gene evidence extracted for %s (%d records skipped)", sorted(out), skipped
    )
    return out
