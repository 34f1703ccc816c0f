from fastapi import APIRouter
from genorisk.api.routes import pharmacogenomics, samples

api_router = APIRouter()

api_router.include_router(pharmacogenomics.router, prefix="/pharmacogenomics", tags=["Pharmacogenomics"])
api_router.include_router(samples.router, prefix="/samples", tags=["Samples"])
