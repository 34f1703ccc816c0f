from fastapi import APIRouter, HTTPException, Query

from genorisk.services.pharmacogenomics.models import (
    DRUG_GENE_MAP,
    SUPPORTED_DRUGS,
    SUPPORTED_GENES,
)
from genorisk.services.pharmacogenomics.phenotype_mapper import infer_phenotype
from genorisk.services.pharmacogenomics.risk_engine import (
    RULE_TABLE_VERSION,
    normalize_drug_name,
    rules_for_drug,
)

router = APIRouter()


@router.get("/supported")
async def get_supported():
    """Genes, drugs and the drug → gene mapping covered by the rule table."""
    return {
        "genes": list(SUPPORTED_GENES),
        "drugs": list(SUPPORTED_DRUGS),
        "drug_gene_map": dict(DRUG_GENE_MAP),
        "rule_table_version": RULE_TABLE_VERSION,
    }


@router.get("/phenotype")
async def get_phenotype(
    diplotype: str = Query(..., description="Diplotype, e.g. *1/*4"),
):
    return {"diplotype": diplotype, "phenotype": infer_phenotype(diplotype).value}


@router.get("/rules/{drug}")
async def get_rules(drug: str):
    """Rule rows per phenotype for a supported drug."""
    rules = rules_for_drug(drug)
    if not rules:
        raise HTTPException(status_code=404, detail=f"Unsupported drug: {drug}")
    return {
        "drug": normalize_drug_name(drug),
        "gene": DRUG_GENE_MAP[normalize_drug_name(drug)],
        "rules": {p.value: m.model_dump(mode="json") for p, m in rules.items()},
    }
