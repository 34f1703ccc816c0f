from fastapi import APIRouter, UploadFile, File, Form, HTTPException, status
import logging

from genorisk.schemas.pharma_schema import AnalyzeResponse, AssessmentResult, ExplainRequest
from genorisk.services.llm.explanation_service import explain_results
from genorisk.services.pipeline.analysis_pipeline import parse_drug_list, run_analysis_pipeline
from genorisk.services.vcf.parser import VcfValidationError, validate_vcf_upload

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post(
    "/analyze",
    response_model=AnalyzeResponse,
    status_code=status.HTTP_200_OK,
    summary="Analyze Pharmacogenomic Risk",
    description="Upload a VCF file and a list of drugs to receive one risk assessment per drug."
)
async def analyze_pharmacogenomics(
    vcf: UploadFile = File(..., description="Patient's VCF file containing annotated variants"),
    drugs: str = Form("", description="Comma-separated drug names; empty means all supported drugs"),
    patient_id: str = Form("PATIENT_001", description="Optional patient identifier"),
    explain: bool = Form(True, description="Attach narrative explanations"),
) -> AnalyzeResponse:
    """
    - **vcf**: Genetic data file (.vcf)
    - **drugs**: e.g. `CODEINE,WARFARIN`
    - **patient_id**: Optional identifier
    """
    drug_list = parse_drug_list(drugs if drugs.strip() else None)
    if not drug_list:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No drugs specified.")

    content = await vcf.read()

    check = validate_vcf_upload(vcf.filename or "", len(content))
    if not check.valid:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=check.error)

    try:
        report = await run_analysis_pipeline(content, drug_list, patient_id, explain=explain)
    except VcfValidationError as ve:
        logger.error("Validation error in pipeline: %s", ve)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"message": str(ve), "errors": ve.errors},
        )
    except Exception as e:
        logger.exception("Unexpected error in analysis pipeline: %s", e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An error occurred during the analysis pipeline."
        )

    return AnalyzeResponse(results=report.results, parse_errors=report.parse_errors)


@router.post("/explain", response_model=list[AssessmentResult])
async def explain_assessments(req: ExplainRequest):
    """Attach narrative explanations to already computed assessments."""
    if not req.assessments:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing assessments array")
    return await explain_results(req.assessments)
