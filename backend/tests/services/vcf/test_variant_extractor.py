"""
Unit tests for per-gene evidence aggregation.
"""

import pytest

from genorisk.services.pharmacogenomics.models import VariantEffect, Zygosity
from genorisk.services.vcf.parser import parse_vcf
from genorisk.services.vcf.variant_extractor import (
    GeneEvidence,
    extract_gene_evidence,
    infer_effect,
    infer_zygosity,
    normalize_rsid,
)

HEADER = "##fileformat=VCFv4.2\n#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO\tFORMAT\tS1\n"


def _row(info, vid="rs1", gt="0/1"):
    return f"chr1\t100\t{vid}\tA\tG\t50\tPASS\t{info}\tGT\t{gt}"


def _evidence(*rows):
    return extract_gene_evidence(parse_vcf(HEADER + "\n".join(rows)))


class TestZygosity:

    @pytest.mark.parametrize("gt", ["1/1", "1|1", "2/2"])
    def test_homozygous(self, gt):
        assert infer_zygosity(gt) == Zygosity.HOMOZYGOUS

    @pytest.mark.parametrize("gt", ["0/1", "1|0", "0/0", "./.", "1", "1/1/1", "", None])
    def test_heterozygous(self, gt):
        assert infer_zygosity(gt) == Zygosity.HETEROZYGOUS


class TestEffect:

    @pytest.mark.parametrize("star,effect", [
        ("*4", VariantEffect.LOSS_OF_FUNCTION),
        ("*3", VariantEffect.LOSS_OF_FUNCTION),
        ("*2", VariantEffect.REDUCED_FUNCTION),
        ("*41", VariantEffect.REDUCED_FUNCTION),
        ("*17", VariantEffect.GAIN_OF_FUNCTION),
        ("*1", VariantEffect.UNKNOWN),
        ("*99", VariantEffect.UNKNOWN),
        (None, VariantEffect.UNKNOWN),
    ])
    def test_effect_table(self, star, effect):
        assert infer_effect(star) == effect


class TestExtractGeneEvidence:

    def test_poor_sample(self, poor_vcf):
        evidence = extract_gene_evidence(parse_vcf(poor_vcf))

        assert set(evidence) == {"CYP2D6", "CYP2C9", "CYP2C19", "SLCO1B1", "TPMT", "DPYD"}
        cyp2d6 = evidence["CYP2D6"]
        assert cyp2d6.star_alleles == ["*4"]
        assert cyp2d6.rsids == ["rs3892097", "rs5030655"]
        assert len(cyp2d6.variants) == 2
        assert all(v.zygosity == Zygosity.HOMOZYGOUS for v in cyp2d6.variants)
        assert all(v.effect == VariantEffect.LOSS_OF_FUNCTION for v in cyp2d6.variants)

    def test_alleles_in_first_seen_order(self):
        evidence = _evidence(
            _row("GENE=TPMT;STAR=*3;RS=rs10"),
            _row("GENE=TPMT;STAR=*1;RS=rs11"),
            _row("GENE=TPMT;STAR=*3;RS=rs10"),
        )
        assert evidence["TPMT"].star_alleles == ["*3", "*1"]
        assert evidence["TPMT"].rsids == ["rs10", "rs11"]
        assert len(evidence["TPMT"].variants) == 3

    def test_unsupported_and_untagged_records_skipped(self):
        evidence = _evidence(
            _row("GENE=BRCA1;STAR=*2;RS=rs5"),
            _row("DP=30"),
            _row("GENE=DPYD;STAR=*2A;RS=rs3918290"),
        )
        assert list(evidence) == ["DPYD"]

    def test_gene_tag_case_insensitive(self):
        evidence = _evidence(_row("GENE=cyp2d6;STAR=*4;RS=rs3892097"))
        assert "CYP2D6" in evidence

    def test_rsid_falls_back_to_id_column(self):
        evidence = _evidence(_row("GENE=CYP2C19;STAR=*2", vid="rs4244285"))
        assert evidence["CYP2C19"].rsids == ["rs4244285"]
        assert evidence["CYP2C19"].variants[0].rsid == "rs4244285"

    def test_missing_star_gives_placeholder_variant(self):
        evidence = _evidence(_row("GENE=SLCO1B1;RS=rs4149056"))
        slco = evidence["SLCO1B1"]

        assert slco.star_alleles == []
        assert slco.variants[0].star_allele == "*?"
        assert slco.variants[0].effect == VariantEffect.UNKNOWN

    def test_missing_rsid_not_collected(self):
        evidence = _evidence(_row("GENE=TPMT;STAR=*3", vid="."))
        assert evidence["TPMT"].rsids == []
        assert evidence["TPMT"].variants[0].rsid == "."


class TestGeneEvidence:

    def test_add_deduplicates(self):
        ev = GeneEvidence(gene="CYP2D6")
        ev.add_star_allele("*1")
        ev.add_star_allele("*1")
        ev.add_star_allele("")
        ev.add_rsid("rs1")
        ev.add_rsid("rs1")
        ev.add_rsid(".")

        assert ev.star_alleles == ["*1"]
        assert ev.rsids == ["rs1"]

    def test_normalize_rsid(self):
        assert normalize_rsid("12345") == "rs12345"
        assert normalize_rsid("rs12345") == "rs12345"

    def test_missing_id_not_prefixed(self):
        assert normalize_rsid(".") == "."
        assert normalize_rsid("") == "."
