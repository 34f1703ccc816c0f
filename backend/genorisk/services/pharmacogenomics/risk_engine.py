"""
Risk Engine - Static (drug, phenotype) rule table and its lookup.

The table is authored reference data (CPIC-aligned) and must be reproduced
exactly; nothing in it is derived at runtime.
"""

from typing import Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from .models import (
    DRUG_GENE_MAP,
    Drug,
    EvidenceLevel,
    Phenotype,
    RecommendationType,
    RiskLabel,
    Severity,
)

RULE_TABLE_VERSION = "2024.1"


class RiskMapping(BaseModel):
    """One row of the rule table."""
    model_config = ConfigDict(frozen=True)

    risk: RiskLabel
    severity: Severity
    confidence: float = Field(..., ge=0.0, le=1.0)
    recommendation_type: RecommendationType
    action: str
    evidence: EvidenceLevel


def _rule(risk, severity, confidence, rec_type, action, evidence) -> RiskMapping:
    return RiskMapping(
        risk=risk,
        severity=severity,
        confidence=confidence,
        recommendation_type=rec_type,
        action=action,
        evidence=evidence,
    )


_R = RiskLabel
_S = Severity
_T = RecommendationType
_E = EvidenceLevel
_P = Phenotype

RISK_RULES: Mapping[str, Mapping[Phenotype, RiskMapping]] = {
    Drug.CODEINE.value: {
        _P.PM: _rule(_R.TOXIC, _S.CRITICAL, 0.95, _T.AVOID_DRUG, "Avoid codeine. Use a non-opioid analgesic or a non-CYP2D6-metabolized opioid (e.g., morphine, oxycodone with caution). CYP2D6 PM cannot convert codeine to morphine effectively, but risk of toxicity from altered metabolic pathways.", _E.STRONG),
        _P.IM: _rule(_R.INEFFECTIVE, _S.MODERATE, 0.85, _T.USE_ALTERNATIVE, "Codeine may have reduced efficacy. Consider alternative analgesics.", _E.STRONG),
        _P.NM: _rule(_R.SAFE, _S.NONE, 0.95, _T.USE_AS_DIRECTED, "Use codeine as directed per standard prescribing guidelines.", _E.STRONG),
        _P.RM: _rule(_R.ADJUST_DOSAGE, _S.MODERATE, 0.8, _T.ADJUST_DOSE, "Use codeine with caution at lower doses. Monitor for adverse effects.", _E.MODERATE),
        _P.URM: _rule(_R.TOXIC, _S.CRITICAL, 0.95, _T.AVOID_DRUG, "Avoid codeine. Ultra-rapid metabolism leads to dangerously high morphine levels. Use non-CYP2D6-metabolized analgesic.", _E.STRONG),
    },
    Drug.WARFARIN.value: {
        _P.PM: _rule(_R.TOXIC, _S.HIGH, 0.9, _T.ADJUST_DOSE, "Reduce warfarin dose significantly (consider 50-70% reduction). CYP2C9 PM leads to decreased warfarin metabolism and elevated bleeding risk.", _E.STRONG),
        _P.IM: _rule(_R.ADJUST_DOSAGE, _S.MODERATE, 0.85, _T.ADJUST_DOSE, "Reduce warfarin dose by approximately 20-40%. Monitor INR closely.", _E.STRONG),
        _P.NM: _rule(_R.SAFE, _S.NONE, 0.9, _T.USE_AS_DIRECTED, "Use standard warfarin dosing with routine INR monitoring.", _E.STRONG),
        _P.RM: _rule(_R.INEFFECTIVE, _S.MODERATE, 0.7, _T.ADJUST_DOSE, "May require higher warfarin doses. Monitor INR and adjust accordingly.", _E.MODERATE),
        _P.URM: _rule(_R.INEFFECTIVE, _S.MODERATE, 0.7, _T.ADJUST_DOSE, "May require higher warfarin doses. Monitor INR closely.", _E.MODERATE),
    },
    Drug.CLOPIDOGREL.value: {
        _P.PM: _rule(_R.INEFFECTIVE, _S.HIGH, 0.95, _T.USE_ALTERNATIVE, "Avoid clopidogrel. Use prasugrel or ticagrelor instead. CYP2C19 PM cannot activate clopidogrel prodrug.", _E.STRONG),
        _P.IM: _rule(_R.INEFFECTIVE, _S.MODERATE, 0.85, _T.USE_ALTERNATIVE, "Consider alternative antiplatelet therapy (prasugrel or ticagrelor). Reduced CYP2C19 activity decreases clopidogrel activation.", _E.STRONG),
        _P.NM: _rule(_R.SAFE, _S.NONE, 0.9, _T.USE_AS_DIRECTED, "Use clopidogrel as directed per standard guidelines.", _E.STRONG),
        _P.RM: _rule(_R.SAFE, _S.NONE, 0.8, _T.USE_AS_DIRECTED, "Use clopidogrel as directed. Enhanced metabolism is not clinically concerning.", _E.MODERATE),
        _P.URM: _rule(_R.SAFE, _S.LOW, 0.75, _T.USE_AS_DIRECTED, "Use clopidogrel as directed. Monitor for increased bleeding risk.", _E.MODERATE),
    },
    Drug.SIMVASTATIN.value: {
        _P.PM: _rule(_R.TOXIC, _S.HIGH, 0.9, _T.ADJUST_DOSE, "Use lower dose simvastatin (max 20 mg/day) or switch to an alternative statin (e.g., rosuvastatin, pravastatin). SLCO1B1 PM increases simvastatin exposure and myopathy risk.", _E.STRONG),
        _P.IM: _rule(_R.ADJUST_DOSAGE, _S.MODERATE, 0.85, _T.ADJUST_DOSE, "Consider lower simvastatin dose or prescribe an alternative statin. Monitor for muscle-related symptoms.", _E.STRONG),
        _P.NM: _rule(_R.SAFE, _S.NONE, 0.9, _T.USE_AS_DIRECTED, "Use simvastatin as directed per standard prescribing guidelines.", _E.STRONG),
        _P.RM: _rule(_R.SAFE, _S.NONE, 0.7, _T.USE_AS_DIRECTED, "Use simvastatin as directed.", _E.WEAK),
        _P.URM: _rule(_R.SAFE, _S.NONE, 0.7, _T.USE_AS_DIRECTED, "Use simvastatin as directed.", _E.WEAK),
    },
    Drug.AZATHIOPRINE.value: {
        _P.PM: _rule(_R.TOXIC, _S.CRITICAL, 0.95, _T.AVOID_DRUG, "Avoid azathioprine or reduce dose by 90%. TPMT PM leads to accumulation of cytotoxic thioguanine nucleotides causing severe myelosuppression.", _E.STRONG),
        _P.IM: _rule(_R.ADJUST_DOSAGE, _S.HIGH, 0.9, _T.ADJUST_DOSE, "Reduce azathioprine dose by 30-70%. Monitor CBC weekly for first 8 weeks.", _E.STRONG),
        _P.NM: _rule(_R.SAFE, _S.NONE, 0.9, _T.USE_AS_DIRECTED, "Use azathioprine as directed with standard monitoring.", _E.STRONG),
        _P.RM: _rule(_R.SAFE, _S.NONE, 0.7, _T.USE_AS_DIRECTED, "Use azathioprine as directed.", _E.WEAK),
        _P.URM: _rule(_R.INEFFECTIVE, _S.MODERATE, 0.7, _T.ADJUST_DOSE, "May require higher doses. Monitor therapeutic response.", _E.WEAK),
    },
    Drug.FLUOROURACIL.value: {
        _P.PM: _rule(_R.TOXIC, _S.CRITICAL, 0.95, _T.AVOID_DRUG, "Avoid fluorouracil. DPYD PM leads to severely impaired drug clearance and life-threatening toxicity (mucositis, myelosuppression, neurotoxicity).", _E.STRONG),
        _P.IM: _rule(_R.TOXIC, _S.HIGH, 0.9, _T.ADJUST_DOSE, "Reduce fluorouracil dose by at least 50%. Monitor closely for toxicity signs.", _E.STRONG),
        _P.NM: _rule(_R.SAFE, _S.NONE, 0.9, _T.USE_AS_DIRECTED, "Use fluorouracil as directed per oncology guidelines.", _E.STRONG),
        _P.RM: _rule(_R.SAFE, _S.NONE, 0.7, _T.USE_AS_DIRECTED, "Use fluorouracil as directed.", _E.WEAK),
        _P.URM: _rule(_R.SAFE, _S.NONE, 0.65, _T.USE_AS_DIRECTED, "Use fluorouracil as directed. Monitor for reduced efficacy.", _E.WEAK),
    },
}

UNKNOWN_RISK = _rule(
    _R.UNKNOWN,
    _S.MODERATE,
    0.0,
    _T.USE_AS_DIRECTED,
    "Insufficient pharmacogenomic data to make a recommendation. Use clinical judgment and standard prescribing guidelines.",
    _E.WEAK,
)


def normalize_drug_name(name: str) -> str:
    return (name or "").strip().upper()


def is_supported_drug(drug: str) -> bool:
    return normalize_drug_name(drug) in DRUG_GENE_MAP


def gene_for_drug(drug: str) -> Optional[str]:
    """Primary gene for a supported drug, else None."""
    return DRUG_GENE_MAP.get(normalize_drug_name(drug))


def evaluate_risk(drug: str, phenotype: Phenotype) -> RiskMapping:
    """
    Exact rule for (drug, phenotype); the shared fallback for unsupported
    drugs, an Unknown phenotype, or a missing pair.
    """
    drug_key = normalize_drug_name(drug)
    try:
        phenotype = Phenotype(phenotype)
    except ValueError:
        return UNKNOWN_RISK
    if drug_key not in RISK_RULES or phenotype == Phenotype.UNKNOWN:
        return UNKNOWN_RISK
    return RISK_RULES[drug_key].get(phenotype, UNKNOWN_RISK)


def rules_for_drug(drug: str) -> Dict[Phenotype, RiskMapping]:
    """All rule rows for a drug (empty for unsupported drugs)."""
    return dict(RISK_RULES.get(normalize_drug_name(drug), {}))
