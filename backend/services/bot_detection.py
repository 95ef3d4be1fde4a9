"""Registration and login bot-risk detection.

Both flows accumulate risk points (clamped to 0-100). Registration flags a
bot at 60 points, login at 50.
"""

import logging
from typing import Awaitable, Callable

from config import settings
from models.responses import BotAnalysisResponse
from models.schemas.attempt import LoginAttempt, RegistrationAttempt
from models.schemas.signal import Evaluation, SignalResult
from services.cache import VelocityTracker
from services.scoring.aggregator import AdditivePoints
from services.scoring.base import SignalSpec, finding_signal
from services.scoring.classifier import (
    LOGIN_BOT_THRESHOLD,
    REGISTRATION_BOT_THRESHOLD,
    bot_classifier,
    trust_score,
)
from services.scoring.engine import ScoringEngine
from services.signals import bot

logger = logging.getLogger(__name__)

CaptchaVerifier = Callable[[str], Awaitable[bool]]


def _to_response(evaluation: Evaluation) -> BotAnalysisResponse:
    risk = evaluation.composite.value
    return BotAnalysisResponse(
        is_bot=evaluation.decision.positive,
        trust_score=trust_score(risk),
        risk_score=risk,
        risk_level=evaluation.decision.risk_band,
        reasons=list(evaluation.decision.reasons),
    )


class BotDetectionService:
    def __init__(
        self,
        registration_velocity: VelocityTracker | None = None,
        login_velocity: VelocityTracker | None = None,
        captcha_verifier: CaptchaVerifier = bot.local_captcha_check,
    ) -> None:
        self.registration_velocity = registration_velocity or VelocityTracker(
            window_seconds=settings.registration_window_seconds,
            max_keys=settings.velocity_max_keys,
        )
        self.login_velocity = login_velocity or VelocityTracker(
            window_seconds=settings.login_window_seconds,
            max_keys=settings.velocity_max_keys,
        )
        self.captcha_verifier = captcha_verifier

        self.registration_engine = ScoringEngine(
            "registration",
            signals=[
                SignalSpec("email", self._email_signal, domain=(0, 100)),
                SignalSpec("username", self._username_signal, domain=(0, 60)),
                SignalSpec("velocity", self._registration_velocity_signal, domain=(0, 40)),
                SignalSpec("captcha", self._registration_captcha_signal, domain=(0, 50)),
                SignalSpec("common_indicators", self._common_indicators_signal, domain=(0, 45)),
            ],
            aggregator=AdditivePoints(100),
            classifier=bot_classifier(REGISTRATION_BOT_THRESHOLD),
        )
        self.login_engine = ScoringEngine(
            "login",
            signals=[
                SignalSpec("fingerprint", self._fingerprint_signal, domain=(0, 80)),
                SignalSpec("captcha", self._login_captcha_signal, domain=(0, 15)),
                SignalSpec("login_velocity", self._login_velocity_signal, domain=(0, 25)),
                SignalSpec("automation", self._automation_signal, domain=(0, 30)),
            ],
            aggregator=AdditivePoints(100),
            classifier=bot_classifier(LOGIN_BOT_THRESHOLD),
        )

    # --- registration signals ---

    def _email_signal(self, attempt: RegistrationAttempt) -> SignalResult:
        return finding_signal("email", bot.check_email_patterns(attempt.email))

    def _username_signal(self, attempt: RegistrationAttempt) -> SignalResult:
        return finding_signal("username", bot.check_username_patterns(attempt.username))

    def _registration_velocity_signal(self, attempt: RegistrationAttempt) -> SignalResult:
        recent = self.registration_velocity.hit(attempt.email.lower())
        return finding_signal("velocity", bot.check_registration_velocity(recent))

    async def _registration_captcha_signal(self, attempt: RegistrationAttempt) -> SignalResult:
        token = attempt.recaptcha_token
        verified = False
        if token:
            try:
                verified = await self.captcha_verifier(token)
            except Exception as e:
                logger.warning("CAPTCHA verification unavailable: %s", e)
                verified = False
        return finding_signal("captcha", bot.check_registration_captcha(token, verified))

    def _common_indicators_signal(self, attempt: RegistrationAttempt) -> SignalResult:
        return finding_signal(
            "common_indicators",
            bot.check_common_bot_indicators(attempt.username, attempt.timestamp),
        )

    # --- login signals ---

    def _fingerprint_signal(self, attempt: LoginAttempt) -> SignalResult:
        return finding_signal("fingerprint", bot.analyze_device_fingerprint(attempt.device_fingerprint))

    def _login_captcha_signal(self, attempt: LoginAttempt) -> SignalResult:
        return finding_signal("captcha", bot.check_login_captcha(attempt.recaptcha_token))

    def _login_velocity_signal(self, attempt: LoginAttempt) -> SignalResult:
        recent = self.login_velocity.hit(attempt.email.lower())
        return finding_signal("login_velocity", bot.check_login_velocity(recent))

    def _automation_signal(self, attempt: LoginAttempt) -> SignalResult:
        return finding_signal("automation", bot.check_for_automation(attempt.user_agent))

    # --- entry points ---

    async def analyze_registration(self, attempt: RegistrationAttempt) -> BotAnalysisResponse:
        evaluation = await self.registration_engine.evaluate(attempt)
        result = _to_response(evaluation)
        if result.is_bot:
            logger.warning(
                "Bot detected during registration: email=%s username=%s risk=%.0f reasons=%s",
                attempt.email, attempt.username, result.risk_score, result.reasons,
            )
        return result

    async def analyze_login(self, attempt: LoginAttempt) -> BotAnalysisResponse:
        evaluation = await self.login_engine.evaluate(attempt)
        result = _to_response(evaluation)
        if result.risk_score > 30:
            logger.info(
                "Suspicious login attempt: email=%s risk=%.0f reasons=%s",
                attempt.email, result.risk_score, result.reasons,
            )
        return result
