from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Union

from genorisk.core.config import get_upload_config

logger = logging.getLogger(__name__)


# ----------------------------------------------------------------------
# Constants
# ----------------------------------------------------------------------

META_PREFIX = "##"
FILEFORMAT_PREFIX = "##fileformat=VCF"
COLUMN_HEADER_PREFIX = "#CHROM"
GENOTYPE_KEY = "GT"
FLAG_VALUE = "true"

MIN_COLUMNS = 8
SAMPLE_COLUMNS = 10
ERROR_PREVIEW_CHARS = 60

MISSING_FILEFORMAT_ERROR = "Missing ##fileformat header. Expected VCF v4.2 format."
MISSING_COLUMN_HEADER_ERROR = "Missing #CHROM header line."


@dataclass(frozen=True)
class VariantRecord:
    chrom: str
    pos: int
    id: str
    ref: str
    alt: str
    qual: str
    filter: str
    info: Mapping[str, str] = field(default_factory=dict)  # keys upper-cased
    genotype: Optional[str] = None                         # raw GT, e.g. "0/1"


@dataclass
class ParsedFile:
    header: List[str]
    variants: List[VariantRecord]
    is_valid: bool
    errors: List[str]


@dataclass(frozen=True)
class UploadCheck:
    valid: bool
    error: Optional[str] = None


class VcfValidationError(ValueError):
    """Raised at the pipeline boundary when a file cannot be assessed at all."""

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.errors = list(errors or [])


def validate_vcf_upload(filename: str, size: int) -> UploadCheck:
    """
    Gate checks run before parsing: recognized extension and maximum size.
    """
    cfg = get_upload_config()
    name = (filename or "").lower()
    if not any(name.endswith(ext) for ext in cfg.allowed_extensions):
        exts = ", ".join(cfg.allowed_extensions)
        return UploadCheck(False, f"File must have a {exts} extension.")
    if size > cfg.max_file_size_bytes:
        limit_mb = cfg.max_file_size_bytes / 1024 / 1024
        return UploadCheck(
            False,
            f"File exceeds maximum size of {limit_mb:g} MB ({size / 1024 / 1024:.1f} MB).",
        )
    return UploadCheck(True)


def parse_vcf(content: Union[str, bytes, Iterable[str]]) -> ParsedFile:
    """
    Parse annotated VCF text into VariantRecords.

    Best effort: malformed data lines are recorded in ``errors`` and skipped,
    never raised. The result is valid only when there are no errors and at
    least one record was parsed.
    """
    errors: List[str] = []
    header: List[str] = []
    variants: List[VariantRecord] = []

    has_fileformat = False
    column_header_seen = False

    for line in _normalize_to_lines(content):
        if line.startswith(META_PREFIX):
            header.append(line)
            if line.startswith(FILEFORMAT_PREFIX):
                has_fileformat = True
            continue

        if line.startswith(COLUMN_HEADER_PREFIX):
            column_header_seen = True
            continue

        if not column_header_seen:
            continue

        record = _parse_variant_line(line, errors)
        if record is not None:
            variants.append(record)

    if not has_fileformat:
        errors.append(MISSING_FILEFORMAT_ERROR)
    if not column_header_seen:
        errors.append(MISSING_COLUMN_HEADER_ERROR)

    is_valid = not errors and len(variants) > 0
    logger.info(
        "Parsed VCF: %d records, %d errors, valid=%s", len(variants), len(errors), is_valid
    )

    return ParsedFile(header=header, variants=variants, is_valid=is_valid, errors=errors)


def _normalize_to_lines(content: Union[str, bytes, Iterable[str]]) -> Iterator[str]:
    """Yield non-blank lines with line endings stripped."""
    if isinstance(content, bytes):
        content = content.decode("utf-8", errors="replace")
    if isinstance(content, str):
        content = content.splitlines()
    for raw in content:
        line = raw.rstrip("\r\n")
        if line.strip():
            yield line


def _preview(line: str) -> str:
    return f"{line[:ERROR_PREVIEW_CHARS]}..."


def _parse_variant_line(line: str, errors: List[str]) -> Optional[VariantRecord]:
    cols = line.split("\t")
    if len(cols) < MIN_COLUMNS:
        errors.append(f"Malformed line (fewer than {MIN_COLUMNS} fields): {_preview(line)}")
        return None

    chrom, pos_s, vid, ref, alt, qual, flt, info_s = cols[:MIN_COLUMNS]

    try:
        pos = int(pos_s)
    except ValueError:
        pos = -1
    if pos < 0:
        errors.append(f"Invalid position '{pos_s}': {_preview(line)}")
        return None

    genotype: Optional[str] = None
    if len(cols) >= SAMPLE_COLUMNS:
        genotype = _extract_genotype(cols[8], cols[9])

    return VariantRecord(
        chrom=chrom,
        pos=pos,
        id=vid,
        ref=ref,
        alt=alt,
        qual=qual,
        filter=flt,
        info=parse_info_field(info_s),
        genotype=genotype,
    )


def parse_info_field(info: str) -> Dict[str, str]:
    """``KEY=value;FLAG`` pairs, keys upper-cased; bare flags map to ``"true"``."""
    out: Dict[str, str] = {}
    if info in (".", ""):
        return out
    for item in info.split(";"):
        if not item:
            continue
        key, sep, value = item.partition("=")
        if not key:
            continue
        out[key.upper()] = value if sep else FLAG_VALUE
    return out


def _extract_genotype(format_col: str, sample_col: str) -> Optional[str]:
    format_keys = format_col.split(":")
    sample_values = sample_col.split(":")
    if GENOTYPE_KEY not in format_keys:
        return None
    idx = format_keys.index(GENOTYPE_KEY)
    if idx >= len(sample_values):
        return None
    return sample_values[idx]
