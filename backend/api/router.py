from fastapi import APIRouter, File, Form, HTTPException, Request, UploadFile
from fastapi.concurrency import run_in_threadpool
from slowapi import Limiter
from slowapi.util import get_remote_address

from api.dependencies import get_cache, get_pipeline
from config import settings
from models.requests import KeywordRequest, TailorRequest
from models.responses import CacheStatus, KeywordResponse
from models.schemas.job_info import CandidateProfile, JobInfo
from models.schemas.pipeline_result import PipelineResult
from services import pdf_parser
from services.keyword_extractor import extract_keywords_cached

router = APIRouter()
limiter = Limiter(key_func=get_remote_address)


@router.get("/health")
async def health():
    return {
        "status": "ok",
        "cache_size": get_cache().size(),
    }


@router.post("/keywords", response_model=KeywordResponse)
@limiter.limit("60/minute")
async def keywords(request: Request, body: KeywordRequest):
    keyword_set, from_cache = extract_keywords_cached(
        body.description,
        get_cache(),
        job_url=body.url,
        max_keywords=body.max_keywords or settings.max_keywords,
    )
    return KeywordResponse(keywords=keyword_set, from_cache=from_cache)


@router.post("/tailor", response_model=PipelineResult)
@limiter.limit("10/minute")
async def tailor(
    request: Request,
    resume_file: UploadFile = File(...),
    job_description: str = Form(...),
    job_url: str = Form(""),
    job_title: str = Form(""),
    job_company: str = Form(""),
):
    # Validate file type
    if not resume_file.filename or not resume_file.filename.lower().endswith(".pdf"):
        raise HTTPException(status_code=400, detail="Only PDF files are accepted")

    # Read and validate size
    content = await resume_file.read()
    max_bytes = settings.max_upload_size_mb * 1024 * 1024
    if len(content) > max_bytes:
        raise HTTPException(
            status_code=400,
            detail=f"File too large. Max size: {settings.max_upload_size_mb}MB",
        )

    if len(job_description) > 20000:
        raise HTTPException(status_code=400, detail="Job description too long (max 20000 chars)")

    try:
        resume_text = pdf_parser.extract_text(content)
    except Exception:
        raise HTTPException(status_code=400, detail="Could not parse PDF file")

    if not resume_text.strip():
        raise HTTPException(status_code=400, detail="No text could be extracted from PDF")

    job = JobInfo(
        title=job_title,
        company=job_company,
        description=job_description,
        url=job_url,
    )
    return await run_in_threadpool(
        get_pipeline().run, job, CandidateProfile(), resume_text
    )


@router.post("/tailor/quick", response_model=PipelineResult)
@limiter.limit("10/minute")
async def tailor_quick(request: Request, body: TailorRequest):
    return await run_in_threadpool(
        get_pipeline().run, body.job, body.candidate, body.resume_text, body.options
    )


@router.get("/cache", response_model=CacheStatus)
async def cache_status():
    cache = get_cache()
    return CacheStatus(
        size=cache.size(),
        max_entries=cache.max_entries,
        ttl_seconds=cache.ttl_seconds,
    )


@router.delete("/cache", response_model=CacheStatus)
async def clear_cache():
    cache = get_cache()
    cache.clear()
    return CacheStatus(size=0, max_entries=cache.max_entries, ttl_seconds=cache.ttl_seconds)
