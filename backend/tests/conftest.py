"""
Shared fixtures: bundled sample VCFs and an offline explanation config.
"""

import pytest

from genorisk.core.config import get_config, reset_config, update_config
from genorisk.services.vcf.samples import (
    SAMPLE_INTERMEDIATE,
    SAMPLE_MIXED,
    SAMPLE_NORMAL,
    SAMPLE_POOR,
    SAMPLE_ULTRARAPID,
)


@pytest.fixture(autouse=True)
def offline_config():
    """No test talks to a real gateway; tests that need one inject a mock transport."""
    update_config(**{"explanation.api_key": None})
    yield get_config()
    reset_config()


@pytest.fixture
def normal_vcf():
    return SAMPLE_NORMAL.content


@pytest.fixture
def poor_vcf():
    return SAMPLE_POOR.content


@pytest.fixture
def intermediate_vcf():
    return SAMPLE_INTERMEDIATE.content


@pytest.fixture
def ultrarapid_vcf():
    return SAMPLE_ULTRARAPID.content


@pytest.fixture
def mixed_vcf():
    return SAMPLE_MIXED.content


@pytest.fixture
def header_only_vcf():
    return SAMPLE_NORMAL.content.split("\n#CHROM")[0] + "\n#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO\n"
