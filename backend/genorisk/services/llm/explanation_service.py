import asyncio
import logging
import time
from typing import Any, Dict, List, Optional, Sequence

from pydantic import BaseModel, ValidationError

from genorisk.core.config import get_explanation_config
from genorisk.schemas.pharma_schema import AssessmentResult, LLMExplanation
from genorisk.services.llm.gateway_client import GatewayClient
from genorisk.services.llm.prompt_builder import build_explanation_prompt
from genorisk.services.pharmacogenomics.models import UNKNOWN_GENE
from genorisk.services.vcf.variant_extractor import MISSING_ID

logger = logging.getLogger(__name__)


class GatewayExplanation(BaseModel):
    """One explanation as returned by the gateway; every field must be present."""
    summary: str
    mechanism: str
    clinical_impact: str
    variant_citations: List[str]


def fallback_explanation(result: AssessmentResult) -> LLMExplanation:
    """Deterministic explanation built only from the computed result."""
    profile = result.pharmacogenomic_profile
    gene = profile.primary_gene if profile.primary_gene != UNKNOWN_GENE else "gene"
    phenotype = profile.phenotype.value

    return LLMExplanation(
        summary=(
            f"Based on the patient's {gene} {profile.diplotype} genotype "
            f"({phenotype} phenotype), the risk assessment for {result.drug} is: "
            f"{result.risk_assessment.risk_label.value}."
        ),
        mechanism=(
            f"The {gene} enzyme is involved in the metabolism of {result.drug}. "
            "Variants in this gene can alter drug metabolism, affecting efficacy and safety."
        ),
        clinical_impact=(
            result.clinical_recommendation.recommended_action
            or "No specific recommendation available."
        ),
        variant_citations=[v.rsid for v in profile.detected_variants if v.rsid != MISSING_ID],
    )


def apply_fallback(results: Sequence[AssessmentResult]) -> List[AssessmentResult]:
    return [r.with_explanation(fallback_explanation(r)) for r in results]


def index_explanations(payload: Optional[Dict[str, Any]]) -> Dict[str, LLMExplanation]:
    """Map upper-cased drug name to a validated explanation; bad entries are dropped."""
    out: Dict[str, LLMExplanation] = {}
    if not isinstance(payload, dict):
        return out
    entries = payload.get("results")
    if not isinstance(entries, list):
        return out

    for entry in entries:
        if not isinstance(entry, dict):
            continue
        drug = str(entry.get("drug") or "").strip().upper()
        if not drug or drug in out:
            continue
        raw = entry.get("explanation")
        if not isinstance(raw, dict) or not raw:
            logger.warning("Gateway returned no explanation for %s", drug)
            continue
        try:
            out[drug] = LLMExplanation(**GatewayExplanation.model_validate(raw).model_dump())
        except ValidationError as e:
            logger.warning("Discarding malformed explanation for %s: %s", drug, e)
    return out


async def explain_results(
    results: Sequence[AssessmentResult],
    *,
    client: Optional[GatewayClient] = None,
) -> List[AssessmentResult]:
    """
    Attach narrative explanations to computed results.

    One batch request; matches are merged by drug name, everything else
    (no match, timeout, gateway error, malformed payload) gets the local
    fallback. Risk fields are never touched and input order is preserved.
    """
    if not results:
        return []

    client = client or GatewayClient()
    if not client.is_configured:
        logger.info("No explanation API key configured, using local explanations")
        return apply_fallback(results)

    start = time.time()
    prompt = build_explanation_prompt(results)
    timeout = get_explanation_config().timeout_seconds

    try:
        payload = await asyncio.wait_for(client.generate_explanations(prompt), timeout=timeout)
    except asyncio.TimeoutError:
        logger.error("Explanation request timed out after %.1fs", timeout)
        payload = None
    except Exception as e:
        logger.exception("Explanation request failed: %s", e)
        payload = None

    explanations = index_explanations(payload)
    if not explanations:
        logger.warning("Explanation generation failed, displaying rule-based explanations only")

    merged: List[AssessmentResult] = []
    for result in results:
        explanation = explanations.get(result.drug.upper())
        if explanation is None:
            explanation = fallback_explanation(result)
        merged.append(result.with_explanation(explanation))

    logger.info(
        "Explanations attached for %d/%d drugs in %.2fs",
        sum(1 for r in results if r.drug.upper() in explanations), len(results), time.time() - start,
    )
    return merged
