from datetime import datetime
from typing import List, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from genorisk.services.pharmacogenomics.models import (
    AnnotationConfidence,
    EvidenceLevel,
    Phenotype,
    RecommendationType,
    RiskLabel,
    Severity,
)
from genorisk.services.vcf.variant_extractor import DetectedVariant

GUIDELINE_SOURCE = "CPIC"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class RiskAssessment(_Frozen):
    risk_label: RiskLabel
    confidence_score: float = Field(..., ge=0.0, le=1.0)
    severity: Severity


class PharmacogenomicProfile(_Frozen):
    primary_gene: str
    diplotype: str
    phenotype: Phenotype
    detected_variants: Tuple[DetectedVariant, ...] = Field(default_factory=tuple)


class ClinicalRecommendation(_Frozen):
    recommendation_type: RecommendationType
    recommended_action: str
    guideline_source: str = GUIDELINE_SOURCE
    evidence_level: EvidenceLevel


class LLMExplanation(_Frozen):
    summary: str = ""
    mechanism: str = ""
    clinical_impact: str = ""
    variant_citations: Tuple[str, ...] = Field(default_factory=tuple)


class QualityMetrics(_Frozen):
    vcf_parsing_success: bool
    variants_detected: bool
    gene_coverage_complete: bool
    annotation_confidence: AnnotationConfidence


class AssessmentResult(_Frozen):
    patient_id: str
    drug: str
    timestamp: str
    risk_assessment: RiskAssessment
    pharmacogenomic_profile: PharmacogenomicProfile
    clinical_recommendation: ClinicalRecommendation
    llm_generated_explanation: LLMExplanation
    quality_metrics: QualityMetrics

    @field_validator('timestamp')
    @classmethod
    def validate_timestamp(cls, v):
        try:
            datetime.fromisoformat(v.replace('Z', '+00:00'))
            return v
        except ValueError:
            raise ValueError("Timestamp must be a valid ISO 8601 string")

    def with_explanation(self, explanation: LLMExplanation) -> "AssessmentResult":
        """New result with the explanation replaced wholesale."""
        return self.model_copy(update={"llm_generated_explanation": explanation})


class AnalyzeResponse(BaseModel):
    results: List[AssessmentResult]
    parse_errors: List[str] = Field(default_factory=list)


class ExplainRequest(BaseModel):
    assessments: List[AssessmentResult]
