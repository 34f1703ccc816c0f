import json
from typing import Sequence

from genorisk.schemas.pharma_schema import AssessmentResult

SYSTEM_PROMPT = """You are a clinical pharmacogenomics expert. For each drug assessment provided, generate a structured explanation. You MUST return valid JSON only, no markdown.

Return format:
{
  "results": [
    {
      "drug": "DRUG_NAME",
      "explanation": {
        "summary": "1-2 sentence plain-language summary of the finding",
        "mechanism": "Explain the pharmacogenomic mechanism (enzyme function, drug metabolism pathway, how the variant affects this)",
        "clinical_impact": "Explain the clinical significance and what the patient/clinician should know",
        "variant_citations": ["rsXXXX", ...]
      }
    }
  ]
}

Rules:
- Reference specific genes, variants (rs IDs), and star alleles
- Explain the biological mechanism accurately
- Match the computed risk label - do NOT contradict it
- Do NOT hallucinate variant IDs or make up facts
- Keep language clear and professional
- Each explanation should be 2-4 sentences per field"""

EXPLANATION_TOOL = {
    "type": "function",
    "function": {
        "name": "provide_explanations",
        "description": "Return structured pharmacogenomic explanations for each drug assessment",
        "parameters": {
            "type": "object",
            "properties": {
                "results": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {
                            "drug": {"type": "string"},
                            "explanation": {
                                "type": "object",
                                "properties": {
                                    "summary": {"type": "string"},
                                    "mechanism": {"type": "string"},
                                    "clinical_impact": {"type": "string"},
                                    "variant_citations": {"type": "array", "items": {"type": "string"}},
                                },
                                "required": ["summary", "mechanism", "clinical_impact", "variant_citations"],
                                "additionalProperties": False,
                            },
                        },
                        "required": ["drug", "explanation"],
                        "additionalProperties": False,
                    },
                },
            },
            "required": ["results"],
            "additionalProperties": False,
        },
    },
}


def build_assessment_block(result: AssessmentResult) -> str:
    profile = result.pharmacogenomic_profile
    variants = [v.model_dump(mode="json") for v in profile.detected_variants]
    return (
        f"Drug: {result.drug}\n"
        f"Gene: {profile.primary_gene}\n"
        f"Diplotype: {profile.diplotype}\n"
        f"Phenotype: {profile.phenotype.value}\n"
        f"Risk: {result.risk_assessment.risk_label.value}\n"
        f"Severity: {result.risk_assessment.severity.value}\n"
        f"Variants: {json.dumps(variants)}\n"
        f"Recommendation: {result.clinical_recommendation.recommended_action}"
    )


def build_explanation_prompt(results: Sequence[AssessmentResult]) -> str:
    """One block per assessment, separated by horizontal rules."""
    return "\n\n---\n\n".join(build_assessment_block(r) for r in results)
