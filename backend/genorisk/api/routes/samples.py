from dataclasses import asdict

from fastapi import APIRouter, HTTPException

from genorisk.services.vcf.samples import ALL_SAMPLES

router = APIRouter()


@router.get("")
async def list_samples():
    """Bundled sample VCFs (metadata only)."""
    return [
        {k: v for k, v in asdict(s).items() if k != "content"}
        for s in ALL_SAMPLES.values()
    ]


@router.get("/{key}")
async def get_sample(key: str):
    sample = ALL_SAMPLES.get(key.lower())
    if sample is None:
        raise HTTPException(status_code=404, detail=f"Unknown sample: {key}")
    return asdict(sample)
