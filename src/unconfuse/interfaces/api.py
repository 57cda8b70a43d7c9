"""
FastAPI REST API Interface
Programmatic access to the decoding engine for automation and integration
"""

from fastapi import FastAPI, File, UploadFile, Form, HTTPException
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from typing import Optional

from unconfuse import __version__
from unconfuse.core.engine import DecodeConfig, DecodeEngine
from unconfuse.core.exceptions import ConfigurationError
from unconfuse.utils.report_generator import ReportGenerator

MAX_UPLOAD_BYTES = 10 * 1024 * 1024  # 10MB

# Initialize FastAPI app
app = FastAPI(
    title="Unconfuse API",
    description="Recover concealed string literals from obfuscated JavaScript",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc"
)

# Add CORS middleware for cross-origin requests
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Default engine (singleton)
engine = DecodeEngine()


def _engine_for(preset: Optional[str], scoring: Optional[str]) -> DecodeEngine:
    """Return the default engine, or a custom one when options are given"""
    if not preset and not scoring:
        return engine
    try:
        if preset:
            config = DecodeConfig.from_preset(preset, **({'scoring': scoring} if scoring else {}))
        else:
            config = DecodeConfig(scoring=scoring)
    except ConfigurationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return DecodeEngine(config)


@app.get("/")
async def root():
    """
    API root endpoint - health check and info
    """
    return {
        "service": "Unconfuse API",
        "version": __version__,
        "status": "operational",
        "endpoints": {
            "decode": "/decode",
            "decode_string": "/decode-string",
            "health": "/health",
            "docs": "/docs"
        }
    }


@app.get("/health")
async def health_check():
    """
    Health check endpoint for monitoring
    """
    return {
        "status": "healthy",
        "service": "unconfuse-api",
        "version": __version__
    }


@app.post("/decode")
async def decode_file(
    file: UploadFile = File(..., description="Obfuscated JavaScript file"),
    preset: Optional[str] = Form(None, description="Decode preset (balanced, strict, entropy, ordinal)"),
    scoring: Optional[str] = Form(None, description="Scoring strategy (adjacent, shannon, mean-ordinal)"),
    include_report: Optional[bool] = Form(False, description="Include markdown report")
):
    """
    Decode every concealed string of an uploaded source file

    Returns status "unsupported" when the obfuscator's fingerprint is absent.

    Example:
    ```bash
    curl -X POST "http://localhost:8000/decode" \
         -F "file=@obfuscated.js"
    ```
    """
    content = await file.read(MAX_UPLOAD_BYTES + 1)
    if len(content) > MAX_UPLOAD_BYTES:
        raise HTTPException(
            status_code=413,
            detail="File too large. Maximum size: 10MB"
        )

    decoder = _engine_for(preset, scoring)
    report = decoder.decode_source(content)
    report.source = file.filename or "upload"

    response_data = report.to_dict()
    if include_report:
        response_data['markdown_report'] = ReportGenerator().generate_markdown(report, report.source)

    return JSONResponse(content=response_data)


@app.post("/decode-string")
async def decode_string(
    literal: str = Form(..., description="Literal to decode"),
    level: int = Form(2, description="Variant level (1 = base-91 default codec)"),
    preset: Optional[str] = Form(None, description="Decode preset"),
    scoring: Optional[str] = Form(None, description="Scoring strategy")
):
    """
    Decode a single literal, bypassing extraction and variant detection

    Example:
    ```bash
    curl -X POST "http://localhost:8000/decode-string" \
         -F "literal=<~87cURD]~>"
    ```
    """
    decoder = _engine_for(preset, scoring)
    try:
        report = decoder.decode_string(literal, level=level)
    except ConfigurationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return JSONResponse(content=report.to_dict())


# Run server with: uvicorn unconfuse.interfaces.api:app --reload --host 0.0.0.0 --port 8000
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
