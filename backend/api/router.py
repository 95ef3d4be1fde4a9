import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from api.dependencies import get_bot_detection, get_job_verification, get_matching_engine
from config import settings
from models.requests import MatchRankRequest, MatchScoreRequest, VerificationRequest
from models.responses import (
    BotAnalysisResponse,
    MatchRankResponse,
    MatchScoreResponse,
    VerificationResponse,
)
from models.schemas.attempt import LoginAttempt, RegistrationAttempt
from services.bot_detection import BotDetectionService
from services.errors import ScoringError
from services.job_verification import JobVerificationService
from services.matching_engine import MatchingEngine

logger = logging.getLogger(__name__)

router = APIRouter()
limiter = Limiter(key_func=get_remote_address)

UNAVAILABLE = "Unable to evaluate now"


def _unavailable(e: ScoringError) -> HTTPException:
    logger.error("Evaluation failed: %s", e)
    return HTTPException(status_code=503, detail=UNAVAILABLE)


@router.get("/health")
async def health():
    return {
        "status": "ok",
        "gemini_configured": bool(settings.gemini_api_key),
    }


@router.post("/match/score", response_model=MatchScoreResponse)
@limiter.limit(settings.rate_limit)
async def match_score(
    request: Request,
    body: MatchScoreRequest,
    engine: MatchingEngine = Depends(get_matching_engine),
):
    try:
        return await engine.calculate_match_score(body.candidate_profile, body.job_requirements)
    except ScoringError as e:
        raise _unavailable(e)


@router.post("/match/rank", response_model=MatchRankResponse)
@limiter.limit(settings.rate_limit)
async def match_rank(
    request: Request,
    body: MatchRankRequest,
    engine: MatchingEngine = Depends(get_matching_engine),
):
    try:
        matches = await engine.find_matches(body.candidate_profile, body.listings)
    except ScoringError as e:
        raise _unavailable(e)
    return MatchRankResponse(matches=matches)


@router.post("/bot/registration", response_model=BotAnalysisResponse)
@limiter.limit(settings.rate_limit)
async def bot_registration(
    request: Request,
    body: RegistrationAttempt,
    service: BotDetectionService = Depends(get_bot_detection),
):
    try:
        return await service.analyze_registration(body)
    except ScoringError as e:
        raise _unavailable(e)


@router.post("/bot/login", response_model=BotAnalysisResponse)
@limiter.limit(settings.rate_limit)
async def bot_login(
    request: Request,
    body: LoginAttempt,
    service: BotDetectionService = Depends(get_bot_detection),
):
    try:
        return await service.analyze_login(body)
    except ScoringError as e:
        raise _unavailable(e)


@router.post("/jobs/verify", response_model=VerificationResponse)
@limiter.limit(settings.rate_limit)
async def verify_job(
    request: Request,
    body: VerificationRequest,
    service: JobVerificationService = Depends(get_job_verification),
):
    try:
        return await service.verify_job_posting(body.posting, body.poster)
    except ScoringError as e:
        raise _unavailable(e)
