"""FastAPI CV parser service: upload a PDF CV, extract structured JSON via OpenAI.

Documents are processed in memory only; nothing is written to disk and
upload contents are never logged, only their size.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, File, Form, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse

import rendering
from config import settings
from encoding import PDF_MEDIA_TYPE, pdf_to_data_url
from errors import ConfigurationError, DocumentUnusableError
from extraction import extract_one, extract_partitioned
from models import ExtractionRequest, ReasoningEffort, SchemaMode, Verbosity
from openai_client import CompletionClient
from resume_schema import COMPLETE_SCHEMA

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

_completion_client: CompletionClient | None = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the OpenAI client on startup if an API key is configured."""
    global _completion_client

    if not settings.OPENAI_API_KEY:
        logger.info("OpenAI not configured (OPENAI_API_KEY is empty), extraction disabled")
    else:
        _completion_client = CompletionClient()
        logger.info(
            "OpenAI client ready: default_model=%s timeout=%ds retry_attempts=%d",
            settings.DEFAULT_MODEL,
            settings.OPENAI_TIMEOUT_SECONDS,
            settings.OPENAI_RETRY_ATTEMPTS,
        )

    yield

    if _completion_client is not None:
        await _completion_client.close()
        _completion_client = None


app = FastAPI(
    title="CV Parser",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/ui",
    openapi_url="/openapi",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
    expose_headers=["Content-Length"],
    max_age=3600,
)


def _html(body: str, status_code: int = 200) -> HTMLResponse:
    return HTMLResponse(content=body, status_code=status_code)


def _is_pdf(file: UploadFile) -> bool:
    filename = (file.filename or "upload.pdf").lower()
    return file.content_type == PDF_MEDIA_TYPE or filename.endswith(".pdf")


@app.get("/", response_class=HTMLResponse)
async def upload_page():
    return _html(rendering.layout("Upload CV", rendering.upload_form()))


@app.get("/debug", response_class=HTMLResponse)
async def debug_page():
    return _html(rendering.layout("Upload CV", rendering.debug_form()))


@app.post("/parse", response_class=HTMLResponse)
async def parse(
    file: UploadFile | None = File(None),
    model: str | None = Form(None),
    reasoning_effort: str | None = Form(None),
    verbosity: str | None = Form(None),
    schema_type: str | None = Form(None),
    debug: str | None = Form(None),
):
    """Parse an uploaded PDF CV and render the extracted JSON."""
    if file is None:
        return _html(rendering.error_page("No file uploaded."), 400)

    if not _is_pdf(file):
        return _html(rendering.error_page("Only PDF files are allowed."), 400)

    if _completion_client is None:
        return _html(
            rendering.error_page("AI extraction is not available - no OpenAI API key configured."),
            503,
        )

    try:
        effort = ReasoningEffort(reasoning_effort) if reasoning_effort else None
        verbosity_level = Verbosity(verbosity) if verbosity else None
        mode = SchemaMode(schema_type) if schema_type else SchemaMode.COMPLETE
    except ValueError as e:
        return _html(rendering.error_page(f"Invalid option: {e}"), 400)

    data = await file.read()
    logger.info(
        "Processing CV: size=%d bytes model=%s schema=%s",
        len(data),
        model or settings.DEFAULT_MODEL,
        mode.value,
    )

    request = ExtractionRequest(
        model_id=model or None,
        document_data=pdf_to_data_url(data),
        reasoning_effort=effort,
        verbosity=verbosity_level,
        debug=debug == "true",
    )

    try:
        if mode is SchemaMode.SEPARATE:
            result = await extract_partitioned(_completion_client, request)
        else:
            result = await extract_one(
                _completion_client,
                request.model_copy(update={"target_schema": COMPLETE_SCHEMA}),
            )
    except DocumentUnusableError:
        return _html(rendering.error_page("Failed to read PDF."), 400)
    except ConfigurationError as e:
        logger.warning("Rejected extraction request: %s", e)
        return _html(rendering.error_page(str(e)), 400)
    except Exception:
        logger.exception("CV extraction failed")
        return _html(rendering.error_page("Unexpected error parsing CV."), 500)

    usage = ""
    if request.debug:
        usage = rendering.usage_block(
            result,
            model=request.model_id or settings.DEFAULT_MODEL,
            reasoning_effort=(effort or ReasoningEffort.MEDIUM).value,
        )
    return _html(rendering.result_page(result, usage))


@app.get("/health")
async def health():
    """Return service status and whether OpenAI is configured."""
    return {
        "status": "healthy",
        "openai_configured": _completion_client is not None,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)
