from .parser import (
    ParsedFile,
    UploadCheck,
    VariantRecord,
    VcfValidationError,
    parse_vcf,
    validate_vcf_upload,
)
from .variant_extractor import DetectedVariant, GeneEvidence, extract_gene_evidence

__all__ = [
    "ParsedFile",
    "UploadCheck",
    "VariantRecord",
    "VcfValidationError",
    "parse_vcf",
    "validate_vcf_upload",
    "DetectedVariant",
    "GeneEvidence",
    "extract_gene_evidence",
]
