"""
samples.py
==========
Bundled sample VCF files covering the main metabolizer scenarios.
Each row carries GENE/STAR/RS INFO tags and a GT sample column.
Used by the demo endpoints and the test suite.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

# (chrom, pos, ref, alt) per gene; two annotated sites each
_SITES: Dict[str, Sequence[Tuple[str, int, str, str]]] = {
    "CYP2D6":  [("chr22", 42526694, "C", "T"), ("chr22", 42526700, "G", "A")],
    "CYP2C9":  [("chr10", 96702047, "C", "T"), ("chr10", 96702050, "A", "C")],
    "CYP2C19": [("chr10", 96541616, "G", "A"), ("chr10", 96541620, "G", "A")],
    "SLCO1B1": [("chr12", 21331549, "T", "C"), ("chr12", 21331555, "A", "G")],
    "TPMT":    [("chr6",  18130918, "C", "G"), ("chr6",  18130920, "C", "T")],
    "DPYD":    [("chr1",  97915614, "C", "T"), ("chr1",  97915620, "A", "C")],
}

_GENE_ORDER = ("CYP2D6", "CYP2C9", "CYP2C19", "SLCO1B1", "TPMT", "DPYD")


@dataclass(frozen=True)
class SampleVcf:
    key: str
    name: str
    description: str
    filename: str
    expected_results: str
    content: str


def _header(sample_id: str = "SAMPLE") -> str:
    return "\n".join([
        "##fileformat=VCFv4.2",
        '##INFO=<ID=GENE,Number=1,Type=String,Description="Gene symbol">',
        '##INFO=<ID=STAR,Number=1,Type=String,Description="Star allele designation">',
        '##INFO=<ID=RS,Number=1,Type=String,Description="dbSNP rsID">',
        f"#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO\tFORMAT\t{sample_id}",
    ])


def _row(chrom: str, pos: int, rsid: str, ref: str, alt: str,
         gene: str, star: str, gt: str) -> str:
    info = f"GENE={gene};STAR={star};RS={rsid}"
    return f"{chrom}\t{pos}\t{rsid}\t{ref}\t{alt}\t100\tPASS\t{info}\tGT\t{gt}"


def build_vcf(calls: Dict[str, Sequence[Tuple[str, str, str]]]) -> str:
    """
    Render a VCF from ``{gene: [(star, rsid, gt), (star, rsid, gt)]}``.
    Calls are laid onto the gene's bundled sites in order.
    """
    lines: List[str] = [_header()]
    for gene in _GENE_ORDER:
        for (chrom, pos, ref, alt), (star, rsid, gt) in zip(_SITES[gene], calls.get(gene, ())):
            lines.append(_row(chrom, pos, rsid, ref, alt, gene, star, gt))
    return "\n".join(lines)


SAMPLE_NORMAL = SampleVcf(
    key="normal",
    name="Normal Metabolizer",
    description="All genes show normal function (*1/*1). All drugs should be Safe.",
    filename="sample_normal_metabolizer.vcf",
    expected_results="All drugs: Safe, high confidence",
    content=build_vcf({
        "CYP2D6":  [("*1", "rs1045642", "0/0"), ("*1", "rs16947", "0/0")],
        "CYP2C9":  [("*1", "rs1799853", "0/0"), ("*1", "rs1057910", "0/0")],
        "CYP2C19": [("*1", "rs4244285", "0/0"), ("*1", "rs4986893", "0/0")],
        "SLCO1B1": [("*1", "rs4149056", "0/0"), ("*1", "rs2306283", "0/0")],
        "TPMT":    [("*1", "rs1800462", "0/0"), ("*1", "rs1800460", "0/0")],
        "DPYD":    [("*1", "rs3918290", "0/0"), ("*1", "rs55886062", "0/0")],
    }),
)

SAMPLE_POOR = SampleVcf(
    key="poor",
    name="Poor Metabolizer (High Risk)",
    description="All genes show loss-of-function (*4/*4 or *3/*3). Expect Toxic or Ineffective for all drugs.",
    filename="sample_poor_metabolizer.vcf",
    expected_results=(
        "Codeine: Toxic, Warfarin: Toxic, Clopidogrel: Ineffective, "
        "Simvastatin: Toxic, Azathioprine: Toxic, Fluorouracil: Toxic"
    ),
    content=build_vcf({
        "CYP2D6":  [("*4", "rs3892097", "1/1"), ("*4", "rs5030655", "1/1")],
        "CYP2C9":  [("*3", "rs1799853", "1/1"), ("*3", "rs1057910", "1/1")],
        "CYP2C19": [("*4", "rs4244285", "1/1"), ("*4", "rs4986893", "1/1")],
        "SLCO1B1": [("*5", "rs4149056", "1/1"), ("*5", "rs2306283", "1/1")],
        "TPMT":    [("*3", "rs1800462", "1/1"), ("*3", "rs1800460", "1/1")],
        "DPYD":    [("*4", "rs3918290", "1/1"), ("*4", "rs55886062", "1/1")],
    }),
)

SAMPLE_INTERMEDIATE = SampleVcf(
    key="intermediate",
    name="Intermediate Metabolizer",
    description="Heterozygous loss-of-function (*1/*4). Expect Ineffective or Adjust Dosage.",
    filename="sample_intermediate_metabolizer.vcf",
    expected_results="Codeine: Ineffective, Warfarin: Adjust Dosage, Clopidogrel: Ineffective, others vary",
    content=build_vcf({
        "CYP2D6":  [("*1", "rs16947", "0/1"), ("*4", "rs3892097", "0/1")],
        "CYP2C9":  [("*1", "rs1799853", "0/1"), ("*4", "rs1057910", "0/1")],
        "CYP2C19": [("*1", "rs4244285", "0/1"), ("*4", "rs4986893", "0/1")],
        "SLCO1B1": [("*1", "rs4149056", "0/1"), ("*5", "rs2306283", "0/1")],
        "TPMT":    [("*1", "rs1800462", "0/1"), ("*4", "rs1800460", "0/1")],
        "DPYD":    [("*1", "rs3918290", "0/1"), ("*4", "rs55886062", "0/1")],
    }),
)

SAMPLE_ULTRARAPID = SampleVcf(
    key="ultrarapid",
    name="Ultra-Rapid Metabolizer",
    description="Gain-of-function alleles (*17/*17). Codeine: Toxic (morphine overdose risk).",
    filename="sample_ultrarapid_metabolizer.vcf",
    expected_results="Codeine: Toxic (critical), Warfarin: Ineffective, Clopidogrel: Safe, others vary",
    content=build_vcf({
        "CYP2D6":  [("*17", "rs28371725", "1/1"), ("*17", "rs28371726", "1/1")],
        "CYP2C9":  [("*17", "rs1799853", "1/1"), ("*17", "rs1057910", "1/1")],
        "CYP2C19": [("*17", "rs12248560", "1/1"), ("*17", "rs12248561", "1/1")],
        "SLCO1B1": [("*1", "rs4149056", "0/0"), ("*1", "rs2306283", "0/0")],
        "TPMT":    [("*1", "rs1800462", "0/0"), ("*1", "rs1800460", "0/0")],
        "DPYD":    [("*1", "rs3918290", "0/0"), ("*1", "rs55886062", "0/0")],
    }),
)

SAMPLE_MIXED = SampleVcf(
    key="mixed",
    name="Mixed Profile (Realistic)",
    description="Different metabolizer statuses per gene. Realistic patient scenario.",
    filename="sample_mixed_profile.vcf",
    expected_results=(
        "Codeine: Safe, Warfarin: Toxic (PM), Clopidogrel: Safe (*1/*2), "
        "Simvastatin: Safe, Azathioprine: Safe (*1/*2), Fluorouracil: Safe"
    ),
    content=build_vcf({
        "CYP2D6":  [("*1", "rs1045642", "0/0"), ("*1", "rs16947", "0/0")],
        "CYP2C9":  [("*3", "rs1799853", "1/1"), ("*3", "rs1057910", "1/1")],
        "CYP2C19": [("*1", "rs4244285", "0/1"), ("*2", "rs4986893", "0/1")],
        "SLCO1B1": [("*1", "rs4149056", "0/0"), ("*1", "rs2306283", "0/0")],
        "TPMT":    [("*1", "rs1800462", "0/1"), ("*2", "rs1800460", "0/1")],
        "DPYD":    [("*1", "rs3918290", "0/0"), ("*1", "rs55886062", "0/0")],
    }),
)

ALL_SAMPLES: Dict[str, SampleVcf] = {
    s.key: s
    for s in (SAMPLE_NORMAL, SAMPLE_POOR, SAMPLE_INTERMEDIATE, SAMPLE_ULTRARAPID, SAMPLE_MIXED)
}
