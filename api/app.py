"""
OCR API - HTTP surface for the OCR service.

Provides endpoints for:
- Single image extraction (JSON elements or plain text)
- Batch extraction
- Listing available models

Run with: uvicorn api.app:app --port 8002  (or python -m api.app)
"""
from typing import Callable, List, Optional

from fastapi import Depends, FastAPI, File, Form, HTTPException, Request, UploadFile
from fastapi.responses import JSONResponse, PlainTextResponse

from core.exceptions import ConfigurationError, OCRExtractionError
from core.models import OCRResult
from services.ocr_service import OCRService
from .dependencies import create_ocr_service, get_ocr_service, get_ocr_service_factory
from .schemas import BatchItemError, ModelsResponse, TextResponse


app = FastAPI(
    title="Vision OCR API",
    description="Text extraction with coordinates through vision language models",
    version="1.0.0"
)


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(OCRExtractionError)
async def extraction_error_handler(request: Request, exc: OCRExtractionError):
    return JSONResponse(status_code=500, content={"detail": str(exc)})


def _serialize(output, image_name: Optional[str] = None):
    if isinstance(output, OCRResult):
        return output.to_dict()
    if isinstance(output, dict):
        return BatchItemError(error=output.get("error", ""), image=image_name).model_dump()
    return TextResponse(text=output).model_dump()


@app.get("/", response_class=PlainTextResponse)
async def root():
    return "Vision OCR API is running. Use POST /api/ocr to process images."


@app.get("/api/models", response_model=ModelsResponse)
async def list_models(service: OCRService = Depends(get_ocr_service)):
    """List known models for the configured provider."""
    return ModelsResponse(provider=service.provider, models=service.get_available_models())


@app.post("/api/ocr")
async def extract_text(
    image: Optional[UploadFile] = File(None),
    provider: Optional[str] = Form(None),
    output_format: str = Form("json"),
    include_colors: bool = Form(True),
    custom_prompt: Optional[str] = Form(None),
    default_service: Callable[[], OCRService] = Depends(get_ocr_service_factory)
):
    """
    Extract text from an uploaded image.

    Args:
        image: Image file
        provider: Optional provider overriding the configured one
        output_format: 'json' or 'text'
        include_colors: Ask for text/background colors
        custom_prompt: Prompt used instead of the built-in one
        default_service: Getter for the configured service, used without override

    Returns:
        OCR result dict, or {"text": ...} for text format
    """
    if image is None:
        raise HTTPException(status_code=400, detail="No image file provided.")

    content = await image.read()
    options = {
        "format": output_format,
        "include_colors": include_colors,
        "custom_prompt": custom_prompt or None,
    }

    if provider:
        async with create_ocr_service(provider) as provider_service:
            output = await provider_service.extract_text(content, **options)
    else:
        output = await default_service().extract_text(content, **options)

    return _serialize(output)


@app.post("/api/ocr/batch")
async def batch_extract(
    images: List[UploadFile] = File(...),
    output_format: str = Form("json"),
    include_colors: bool = Form(True),
    concurrency: int = Form(3),
    service: OCRService = Depends(get_ocr_service)
):
    """
    Extract text from several uploaded images.

    Returns:
        List with one entry per image, in upload order; failed images
        are reported as {"error": ..., "image": filename}
    """
    if concurrency < 1:
        raise HTTPException(status_code=400, detail="Concurrency must be at least 1.")

    contents = [await upload.read() for upload in images]
    outputs = await service.batch_process(
        contents,
        concurrency=concurrency,
        format=output_format,
        include_colors=include_colors
    )
    return [
        _serialize(output, image_name=upload.filename)
        for output, upload in zip(outputs, images)
    ]


if __name__ == "__main__":
    import uvicorn
    from config.settings import settings

    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
