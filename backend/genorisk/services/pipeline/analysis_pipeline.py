"""
Analysis Pipeline - Orchestrates VCF → evidence → phenotype → risk → explanation.

The composition step is synchronous and pure; only the optional explanation
augmentation suspends, and it can only replace the explanation field of an
already complete result.
"""
import logging
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Mapping, Optional, Union

from genorisk.schemas.pharma_schema import (
    AssessmentResult,
    ClinicalRecommendation,
    LLMExplanation,
    PharmacogenomicProfile,
    QualityMetrics,
    RiskAssessment,
)
from genorisk.services.llm.explanation_service import explain_results
from genorisk.services.pharmacogenomics.models import (
    SUPPORTED_DRUGS,
    UNKNOWN_GENE,
    AnnotationConfidence,
)
from genorisk.services.pharmacogenomics.phenotype_mapper import (
    infer_phenotype,
    resolve_diplotype,
)
from genorisk.services.pharmacogenomics.risk_engine import (
    evaluate_risk,
    gene_for_drug,
    normalize_drug_name,
)
from genorisk.services.vcf.parser import (
    ParsedFile,
    VcfValidationError,
    parse_vcf,
    validate_vcf_upload,
)
from genorisk.services.vcf.variant_extractor import GeneEvidence, extract_gene_evidence

logger = logging.getLogger(__name__)


@dataclass
class AnalysisReport:
    results: List[AssessmentResult]
    parse_errors: List[str] = field(default_factory=list)
    is_valid: bool = True


def determine_confidence(evidence: Optional[GeneEvidence]) -> AnnotationConfidence:
    if evidence is None:
        return AnnotationConfidence.LOW
    if len(evidence.star_alleles) >= 2 and evidence.rsids:
        return AnnotationConfidence.HIGH
    if evidence.star_alleles:
        return AnnotationConfidence.MEDIUM
    return AnnotationConfidence.LOW


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def assess_drug(
    drug: str,
    gene_evidence: Mapping[str, GeneEvidence],
    patient_id: str,
    *,
    parsing_success: bool = True,
) -> AssessmentResult:
    """
    Compose the assessment for one drug. Unsupported drugs and missing
    evidence degrade to the Unknown path instead of raising.
    """
    drug_upper = normalize_drug_name(drug)
    gene = gene_for_drug(drug_upper)
    evidence = gene_evidence.get(gene) if gene else None

    diplotype = resolve_diplotype(evidence)
    phenotype = infer_phenotype(diplotype)
    mapping = evaluate_risk(drug_upper, phenotype)

    logger.debug(
        "Assessed %s: gene=%s diplotype=%s phenotype=%s risk=%s",
        drug_upper, gene, diplotype, phenotype.value, mapping.risk.value,
    )

    detected = list(evidence.variants) if evidence else []

    return AssessmentResult(
        patient_id=patient_id,
        drug=drug_upper,
        timestamp=_now_iso(),
        risk_assessment=RiskAssessment(
            risk_label=mapping.risk,
            confidence_score=round(mapping.confidence, 2),
            severity=mapping.severity,
        ),
        pharmacogenomic_profile=PharmacogenomicProfile(
            primary_gene=gene or UNKNOWN_GENE,
            diplotype=diplotype,
            phenotype=phenotype,
            detected_variants=detected,
        ),
        clinical_recommendation=ClinicalRecommendation(
            recommendation_type=mapping.recommendation_type,
            recommended_action=mapping.action,
            evidence_level=mapping.evidence,
        ),
        llm_generated_explanation=LLMExplanation(
            variant_citations=list(evidence.rsids) if evidence else [],
        ),
        quality_metrics=QualityMetrics(
            vcf_parsing_success=parsing_success,
            variants_detected=len(detected) > 0,
            gene_coverage_complete=evidence is not None and len(evidence.star_alleles) >= 2,
            annotation_confidence=determine_confidence(evidence),
        ),
    )


def assess_drugs(
    drugs: Iterable[str],
    gene_evidence: Mapping[str, GeneEvidence],
    patient_id: str,
    *,
    parsing_success: bool = True,
) -> List[AssessmentResult]:
    """One result per requested drug, in request order."""
    return [
        assess_drug(d, gene_evidence, patient_id, parsing_success=parsing_success)
        for d in drugs
    ]


def parse_drug_list(drugs: Union[str, Iterable[str], None]) -> List[str]:
    """
    Accept a comma-separated string or an iterable; blanks are dropped,
    duplicates (after canonicalization) collapse. None means every supported drug.
    """
    if drugs is None:
        return list(SUPPORTED_DRUGS)
    if isinstance(drugs, str):
        drugs = drugs.split(",")
    out: List[str] = []
    for d in drugs:
        name = normalize_drug_name(d)
        if name and name not in out:
            out.append(name)
    return out


def analyze_content(
    content: Union[str, bytes],
    drugs: Iterable[str],
    patient_id: str,
    *,
    filename: Optional[str] = None,
) -> AnalysisReport:
    """
    Gate, parse, aggregate and assess. Raises VcfValidationError only when the
    upload gate fails or the file yields no usable records.
    """
    if filename is not None:
        size = len(content.encode("utf-8")) if isinstance(content, str) else len(content)
        check = validate_vcf_upload(filename, size)
        if not check.valid:
            raise VcfValidationError(check.error, [check.error])

    parsed: ParsedFile = parse_vcf(content)
    if not parsed.variants:
        raise VcfValidationError(
            "VCF contains no usable variant records.", parsed.errors
        )
    if parsed.errors:
        logger.warning(
            "Proceeding with partially usable VCF (%d errors)", len(parsed.errors)
        )

    gene_evidence: Dict[str, GeneEvidence] = extract_gene_evidence(parsed)
    results = assess_drugs(drugs, gene_evidence, patient_id, parsing_success=parsed.is_valid)

    return AnalysisReport(
        results=results,
        parse_errors=list(parsed.errors),
        is_valid=parsed.is_valid,
    )


async def run_analysis_pipeline(
    content: Union[str, bytes],
    drugs: Iterable[str],
    patient_id: str,
    *,
    filename: Optional[str] = None,
    explain: bool = True,
) -> AnalysisReport:
    """
    Full pipeline: VCF → parse → evidence → phenotype → risk → explanation.
    """
    logger.info("Starting analysis pipeline for patient %s", patient_id)
    start_time = time.time()

    report = analyze_content(content, drugs, patient_id, filename=filename)

    if explain and report.results:
        report.results = await explain_results(report.results)

    logger.info(
        "Pipeline execution time: %.2fs (%d drugs)", time.time() - start_time, len(report.results)
    )
    return report
