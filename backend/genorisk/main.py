from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from genorisk.api.router import api_router
from genorisk.api.routes import analysis
from genorisk.core import logging  # Initialize logging

app = FastAPI(
    title="genorisk API",
    description="Genotype-to-recommendation pharmacogenomic risk engine",
    version="1.0.0"
)

# CORS Configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API Routers
app.include_router(api_router, prefix="/api/v1")
app.include_router(analysis.router, prefix="/api/v1", tags=["Analysis"])


@app.get("/health")
async def health_check():
    return {"status": "ok", "service": "genorisk"}
