"""
Closed vocabularies shared by the parser, the rule engine and the API schemas.
All enums are str-valued so they serialize to their wire value.
"""

from enum import Enum
from typing import Dict, Tuple


class Gene(str, Enum):
    CYP2D6 = "CYP2D6"
    CYP2C19 = "CYP2C19"
    CYP2C9 = "CYP2C9"
    SLCO1B1 = "SLCO1B1"
    TPMT = "TPMT"
    DPYD = "DPYD"


class Drug(str, Enum):
    CODEINE = "CODEINE"
    WARFARIN = "WARFARIN"
    CLOPIDOGREL = "CLOPIDOGREL"
    SIMVASTATIN = "SIMVASTATIN"
    AZATHIOPRINE = "AZATHIOPRINE"
    FLUOROURACIL = "FLUOROURACIL"


class Phenotype(str, Enum):
    """Metabolizer phenotype, short CPIC code."""
    PM = "PM"    # Poor
    IM = "IM"    # Intermediate
    NM = "NM"    # Normal
    RM = "RM"    # Rapid
    URM = "URM"  # Ultra-rapid
    UNKNOWN = "Unknown"


class RiskLabel(str, Enum):
    SAFE = "Safe"
    ADJUST_DOSAGE = "Adjust Dosage"
    TOXIC = "Toxic"
    INEFFECTIVE = "Ineffective"
    UNKNOWN = "Unknown"


class Severity(str, Enum):
    NONE = "none"
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    CRITICAL = "critical"


class RecommendationType(str, Enum):
    USE_AS_DIRECTED = "use_as_directed"
    ADJUST_DOSE = "adjust_dose"
    AVOID_DRUG = "avoid_drug"
    USE_ALTERNATIVE = "use_alternative"


class EvidenceLevel(str, Enum):
    STRONG = "strong"
    MODERATE = "moderate"
    WEAK = "weak"


class AnnotationConfidence(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Zygosity(str, Enum):
    HETEROZYGOUS = "heterozygous"
    HOMOZYGOUS = "homozygous"


class VariantEffect(str, Enum):
    LOSS_OF_FUNCTION = "loss_of_function"
    GAIN_OF_FUNCTION = "gain_of_function"
    REDUCED_FUNCTION = "reduced_function"
    UNKNOWN = "unknown"


SUPPORTED_GENES: Tuple[str, ...] = tuple(g.value for g in Gene)
SUPPORTED_DRUGS: Tuple[str, ...] = tuple(d.value for d in Drug)

# One primary gene per drug
DRUG_GENE_MAP: Dict[str, str] = {
    Drug.CODEINE.value:      Gene.CYP2D6.value,
    Drug.WARFARIN.value:     Gene.CYP2C9.value,
    Drug.CLOPIDOGREL.value:  Gene.CYP2C19.value,
    Drug.SIMVASTATIN.value:  Gene.SLCO1B1.value,
    Drug.AZATHIOPRINE.value: Gene.TPMT.value,
    Drug.FLUOROURACIL.value: Gene.DPYD.value,
}

# Star-allele designation buckets, shared by effect classification and scoring
LOSS_OF_FUNCTION_ALLELES = frozenset({"*3", "*4", "*5", "*6", "*7"})
REDUCED_FUNCTION_ALLELES = frozenset({"*2", "*8", "*9", "*10", "*41", "*1B", "*2A"})
GAIN_OF_FUNCTION_ALLELES = frozenset({"*17", "*xN"})
REFERENCE_ALLELE = "*1"

UNKNOWN_ALLELE = "*?"
UNKNOWN_DIPLOTYPE = f"{UNKNOWN_ALLELE}/{UNKNOWN_ALLELE}"
UNKNOWN_GENE = "Unknown"
