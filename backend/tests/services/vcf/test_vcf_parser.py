"""
Unit tests for the VCF parser and the upload gate.
"""

import pytest

from genorisk.core.config import update_config
from genorisk.services.vcf.parser import (
    MISSING_COLUMN_HEADER_ERROR,
    MISSING_FILEFORMAT_ERROR,
    parse_info_field,
    parse_vcf,
    validate_vcf_upload,
)

HEADER = "##fileformat=VCFv4.2\n#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO\tFORMAT\tS1\n"
ROW = "chr22\t42526694\trs3892097\tC\tT\t100\tPASS\tGENE=CYP2D6;STAR=*4;RS=rs3892097\tGT\t1/1"


class TestParseVcf:
    """Line-level parsing behavior."""

    def test_sample_file_is_valid(self, normal_vcf):
        parsed = parse_vcf(normal_vcf)

        assert parsed.is_valid is True
        assert parsed.errors == []
        assert len(parsed.variants) == 12
        assert parsed.header[0] == "##fileformat=VCFv4.2"

    def test_record_fields(self):
        parsed = parse_vcf(HEADER + ROW)
        record = parsed.variants[0]

        assert record.chrom == "chr22"
        assert record.pos == 42526694
        assert record.id == "rs3892097"
        assert record.ref == "C"
        assert record.alt == "T"
        assert record.filter == "PASS"
        assert record.info == {"GENE": "CYP2D6", "STAR": "*4", "RS": "rs3892097"}
        assert record.genotype == "1/1"

    def test_bytes_and_crlf_input(self):
        content = (HEADER + ROW).replace("\n", "\r\n").encode("utf-8")
        parsed = parse_vcf(content)

        assert parsed.is_valid is True
        assert parsed.variants[0].genotype == "1/1"

    def test_blank_lines_ignored(self):
        parsed = parse_vcf(HEADER + "\n\n" + ROW + "\n\n")
        assert len(parsed.variants) == 1
        assert parsed.errors == []

    def test_missing_fileformat_is_reported_but_records_kept(self):
        content = "#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO\tFORMAT\tS1\n" + ROW
        parsed = parse_vcf(content)

        assert MISSING_FILEFORMAT_ERROR in parsed.errors
        assert len(parsed.variants) == 1
        assert parsed.is_valid is False

    def test_missing_column_header(self):
        parsed = parse_vcf("##fileformat=VCFv4.2\n" + ROW)

        assert MISSING_COLUMN_HEADER_ERROR in parsed.errors
        assert parsed.variants == []
        assert parsed.is_valid is False

    def test_malformed_line_is_skipped(self):
        parsed = parse_vcf(HEADER + "chr1\t100\trs1\n" + ROW)

        assert len(parsed.variants) == 1
        assert len(parsed.errors) == 1
        assert parsed.errors[0].startswith("Malformed line (fewer than 8 fields): chr1")
        assert parsed.is_valid is False

    def test_invalid_position(self):
        bad = ROW.replace("42526694", "abc", 1)
        parsed = parse_vcf(HEADER + bad)

        assert parsed.variants == []
        assert parsed.errors[0].startswith("Invalid position 'abc'")

    def test_negative_position(self):
        parsed = parse_vcf(HEADER + ROW.replace("42526694", "-5", 1))
        assert parsed.errors[0].startswith("Invalid position '-5'")

    def test_header_only_is_not_valid(self, header_only_vcf):
        parsed = parse_vcf(header_only_vcf)

        assert parsed.variants == []
        assert parsed.errors == []
        assert parsed.is_valid is False

    def test_no_sample_column_means_no_genotype(self):
        eight_cols = "\t".join(ROW.split("\t")[:8])
        parsed = parse_vcf(HEADER + eight_cols)
        assert parsed.variants[0].genotype is None

    def test_genotype_read_from_format_position(self):
        row = ROW.replace("\tGT\t1/1", "\tDP:GT\t30:0|1")
        parsed = parse_vcf(HEADER + row)
        assert parsed.variants[0].genotype == "0|1"

    def test_format_without_gt(self):
        row = ROW.replace("\tGT\t1/1", "\tDP\t30")
        parsed = parse_vcf(HEADER + row)
        assert parsed.variants[0].genotype is None


class TestParseInfoField:

    def test_keys_upper_cased(self):
        assert parse_info_field("gene=CYP2D6;star=*4") == {"GENE": "CYP2D6", "STAR": "*4"}

    def test_bare_flag(self):
        assert parse_info_field("DB;RS=rs1") == {"DB": "true", "RS": "rs1"}

    def test_missing_info(self):
        assert parse_info_field(".") == {}
        assert parse_info_field("") == {}


class TestUploadGate:

    def test_accepts_vcf_extension_case_insensitive(self):
        assert validate_vcf_upload("patient.VCF", 1024).valid is True

    def test_rejects_other_extension(self):
        check = validate_vcf_upload("patient.txt", 1024)

        assert check.valid is False
        assert ".vcf" in check.error

    def test_rejects_oversized_file(self):
        check = validate_vcf_upload("patient.vcf", 5 * 1024 * 1024 + 1)

        assert check.valid is False
        assert "5 MB" in check.error

    @pytest.mark.parametrize("size", [0, 5 * 1024 * 1024])
    def test_size_boundary(self, size):
        assert validate_vcf_upload("patient.vcf", size).valid is True

    def test_limit_follows_config(self):
        update_config(**{"upload.max_file_size_bytes": 10})
        assert validate_vcf_upload("patient.vcf", 11).valid is False
