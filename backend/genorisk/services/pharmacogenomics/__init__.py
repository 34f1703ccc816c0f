"""
Pharmacogenomics Service

Deterministic, rule-based phenotype inference and drug risk classification
for the six supported gene-drug pairs.
"""

from .models import (
    AnnotationConfidence,
    Drug,
    DRUG_GENE_MAP,
    EvidenceLevel,
    Gene,
    Phenotype,
    RecommendationType,
    RiskLabel,
    Severity,
    SUPPORTED_DRUGS,
    SUPPORTED_GENES,
    VariantEffect,
    Zygosity,
)
from .phenotype_mapper import allele_score, infer_phenotype, resolve_diplotype
from .risk_engine import (
    RISK_RULES,
    RULE_TABLE_VERSION,
    UNKNOWN_RISK,
    RiskMapping,
    evaluate_risk,
    gene_for_drug,
    normalize_drug_name,
)

__all__ = [
    # Vocabularies
    'AnnotationConfidence',
    'Drug',
    'DRUG_GENE_MAP',
    'EvidenceLevel',
    'Gene',
    'Phenotype',
    'RecommendationType',
    'RiskLabel',
    'Severity',
    'SUPPORTED_DRUGS',
    'SUPPORTED_GENES',
    'VariantEffect',
    'Zygosity',

    # Phenotype Mapping
    'allele_score',
    'infer_phenotype',
    'resolve_diplotype',

    # Risk Engine
    'RISK_RULES',
    'RULE_TABLE_VERSION',
    'UNKNOWN_RISK',
    'RiskMapping',
    'evaluate_risk',
    'gene_for_drug',
    'normalize_drug_name',
]
