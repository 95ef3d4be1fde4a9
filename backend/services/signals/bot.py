"""Registration/login bot-risk heuristics.

Each check returns a ``Finding`` whose score is the number of risk points it
adds. Checks are deterministic; the velocity counts they consume are
supplied by the caller's ``VelocityTracker``.
"""

import math
import re
from collections import Counter
from datetime import datetime

from models.schemas.signal import Finding

SUSPICIOUS_EMAIL_PATTERNS = [
    re.compile(r"^[a-z]+\d{4,}@"),  # name1234@
    re.compile(r"^test", re.IGNORECASE),
    re.compile(r"^bot", re.IGNORECASE),
    re.compile(r"^spam", re.IGNORECASE),
    re.compile(r"\+\d+@"),  # plus addressing with numbers
    re.compile(r"@(mailinator|guerrillamail|temp-mail|10minutemail)", re.IGNORECASE),
]

SUSPICIOUS_USERNAME_PATTERNS = [
    re.compile(r"^user\d{6,}$"),
    re.compile(r"^[a-z]{3}\d{5,}$"),
    re.compile(r"^test", re.IGNORECASE),
    re.compile(r"^bot", re.IGNORECASE),
    re.compile(r"\d{8,}"),
]

SUSPICIOUS_EMAIL_KEYWORDS = {"bot", "test", "spam", "fake", "temp", "dummy"}

DISPOSABLE_DOMAINS = {
    "mailinator.com",
    "guerrillamail.com",
    "temp-mail.org",
    "10minutemail.com",
    "throwaway.email",
    "yopmail.com",
}

KEYBOARD_ROWS = ["qwertyuiop", "asdfghjkl", "zxcvbnm", "1234567890"]

COMMON_BOT_NAMES = ["admin", "test", "user", "demo", "bot"]

KNOWN_BOT_FINGERPRINTS = ["0000000000000000", "1111111111111111", "ffffffffffffffff"]

AUTOMATION_MARKERS = [
    "headlesschrome", "phantomjs", "selenium", "webdriver", "puppeteer",
    "playwright", "python-requests", "curl/", "wget/", "scrapy",
]

_UNUSUAL_EMAIL_CHARS = re.compile(r"[^a-zA-Z0-9@._+-]")

MIN_USERNAME_ENTROPY = 2.0
MIN_FINGERPRINT_LENGTH = 32
MIN_CAPTCHA_TOKEN_LENGTH = 20
MAX_RECENT_REGISTRATIONS = 2
MAX_RECENT_LOGINS = 5


def shannon_entropy(text: str) -> float:
    """Bits per character."""
    if not text:
        return 0.0
    length = len(text)
    return -sum(
        (count / length) * math.log2(count / length)
        for count in Counter(text).values()
    )


def is_keyboard_walk(text: str) -> bool:
    lower = text.lower()
    for row in KEYBOARD_ROWS:
        for i in range(len(row) - 3):
            if row[i:i + 4] in lower:
                return True
    return False


def has_sequential_pattern(text: str) -> bool:
    for i in range(len(text) - 2):
        a, b, c = (ord(ch) for ch in text[i:i + 3])
        if b == a + 1 and c == b + 1:
            return True
    return False


def is_disposable_domain(domain: str) -> bool:
    return domain.lower() in DISPOSABLE_DOMAINS


def _email_tokens(email: str) -> set[str]:
    return set(re.findall(r"[a-z]+", email.lower()))


def check_email_patterns(email: str) -> Finding:
    reasons: list[str] = []
    score = 0

    if any(p.search(email) for p in SUSPICIOUS_EMAIL_PATTERNS):
        reasons.append("Suspicious email pattern detected")
        score += 25

    if _email_tokens(email) & SUSPICIOUS_EMAIL_KEYWORDS:
        reasons.append("Suspicious keyword in email address")
        score += 20

    domain = email.rpartition("@")[2]
    if is_disposable_domain(domain):
        reasons.append("Disposable email address")
        score += 40

    if _UNUSUAL_EMAIL_CHARS.search(email):
        reasons.append("Unusual characters in email")
        score += 15

    return Finding(flagged=score > 0, score=score, reasons=reasons)


def check_username_patterns(username: str) -> Finding:
    reasons: list[str] = []
    score = 0

    if any(p.search(username) for p in SUSPICIOUS_USERNAME_PATTERNS):
        reasons.append("Suspicious username pattern")
        score += 20

    if shannon_entropy(username) < MIN_USERNAME_ENTROPY:
        reasons.append("Low username entropy")
        score += 15

    if is_keyboard_walk(username):
        reasons.append("Keyboard walk pattern detected")
        score += 25

    return Finding(flagged=score > 0, score=score, reasons=reasons)


def check_registration_velocity(recent_count: int) -> Finding:
    """``recent_count`` is the number of earlier registrations inside the window."""
    if recent_count > MAX_RECENT_REGISTRATIONS:
        return Finding(flagged=True, score=40, reasons=["Rapid registration attempts"])
    return Finding()


def check_registration_captcha(token: str | None, verified: bool) -> Finding:
    if not token:
        return Finding(flagged=True, score=30, reasons=["Missing CAPTCHA verification"])
    if not verified:
        return Finding(flagged=True, score=50, reasons=["Failed CAPTCHA verification"])
    return Finding()


def check_common_bot_indicators(username: str, timestamp: datetime) -> Finding:
    reasons: list[str] = []
    score = 0

    if has_sequential_pattern(username):
        reasons.append("Sequential pattern in username")
        score += 15

    # Bots often register at odd hours
    if 2 <= timestamp.hour <= 5:
        reasons.append("Registration during unusual hours")
        score += 10

    lower = username.lower()
    if any(name in lower for name in COMMON_BOT_NAMES):
        reasons.append("Common bot name pattern")
        score += 20

    return Finding(flagged=score > 0, score=score, reasons=reasons)


def analyze_device_fingerprint(fingerprint: str | None) -> Finding:
    if not fingerprint:
        return Finding(flagged=True, score=20, reasons=["Missing device fingerprint"])

    reasons: list[str] = []
    score = 0

    if len(fingerprint) < MIN_FINGERPRINT_LENGTH:
        reasons.append("Invalid device fingerprint")
        score += 30

    if any(known in fingerprint.lower() for known in KNOWN_BOT_FINGERPRINTS):
        reasons.append("Known bot fingerprint")
        score += 50

    return Finding(flagged=score > 0, score=score, reasons=reasons)


def check_login_captcha(token: str | None) -> Finding:
    if not token:
        return Finding(flagged=True, score=15, reasons=["Missing CAPTCHA for suspicious login"])
    return Finding()


def check_login_velocity(recent_count: int) -> Finding:
    if recent_count > MAX_RECENT_LOGINS:
        return Finding(flagged=True, score=25, reasons=["Rapid repeated login attempts"])
    return Finding()


def check_for_automation(user_agent: str | None) -> Finding:
    if not user_agent:
        return Finding()
    lower = user_agent.lower()
    if any(marker in lower for marker in AUTOMATION_MARKERS):
        return Finding(flagged=True, score=30, reasons=["Automated client detected"])
    return Finding()


async def local_captcha_check(token: str) -> bool:
    """Offline stand-in for a reCAPTCHA verification round-trip."""
    return len(token) > MIN_CAPTCHA_TOKEN_LENGTH
