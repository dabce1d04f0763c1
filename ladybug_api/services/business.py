"""Business and data helpers: validators, palettes, demo rates, demo weather, UUIDs."""

from __future__ import annotations

import random
import re
import uuid

from ladybug_api.core.errors import ValidationAppError
from ladybug_api.schemas.business import (
    RGB,
    ColorInfo,
    CurrencyResponse,
    EmailValidationResponse,
    PaletteResponse,
    PhoneValidationResponse,
    WeatherInfo,
    WeatherResponse,
)
from ladybug_api.schemas.tools import UUIDResponse
from ladybug_api.services.inputs import require_text

_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
DISPOSABLE_DOMAINS = ("tempmail.org", "10minutemail.com", "guerrillamail.com", "mailinator.com")

TOLL_FREE_PREFIXES = ("800", "888", "877", "866")

PALETTES: dict[str, tuple[str, ...]] = {
    "vibrant": ("#FF6B6B", "#4ECDC4", "#45B7D1", "#FFA07A", "#98D8C8"),
    "pastel": ("#FFB6C1", "#E6E6FA", "#F0E68C", "#DDA0DD", "#B0E0E6"),
    "dark": ("#2C3E50", "#34495E", "#7F8C8D", "#95A5A6", "#BDC3C7"),
    "nature": ("#228B22", "#32CD32", "#90EE90", "#006400", "#8FBC8F"),
    "ocean": ("#006994", "#0099CC", "#00B4D8", "#48CAE4", "#90E0EF"),
    "sunset": ("#FF6B35", "#F77B71", "#FFA07A", "#FFB347", "#FFD700"),
}
COLOR_ROLES = ("Primary", "Secondary", "Accent", "Highlight", "Background")

# Demo rates keyed by "FROM-TO"; unknown pairs convert at 1.
EXCHANGE_RATES: dict[str, float] = {
    "USD-EUR": 0.85,
    "USD-GBP": 0.73,
    "USD-JPY": 110.5,
    "EUR-USD": 1.18,
    "EUR-GBP": 0.86,
    "GBP-USD": 1.37,
    "GBP-EUR": 1.16,
}

WEATHER_DESCRIPTIONS = ("Sunny", "Cloudy", "Rainy", "Partly Cloudy")
MAX_UUIDS = 10


def validate_email(email: str | None) -> EmailValidationResponse:
    email = require_text(email, "email", max_length=320)
    domain = email.split("@", 1)[1] if "@" in email else None
    return EmailValidationResponse(
        email=email,
        is_valid=bool(_EMAIL_PATTERN.match(email)),
        domain=domain,
        domain_exists=bool(domain and "." in domain),
        is_disposable=bool(domain and any(d in domain.lower() for d in DISPOSABLE_DOMAINS)),
    )


def detect_phone_type(digits: str) -> str:
    if digits.startswith("1"):
        return "mobile"
    if digits.startswith("2"):
        return "landline"
    if digits.startswith(TOLL_FREE_PREFIXES):
        return "toll-free"
    return "unknown"


def validate_phone(phone: str | None, country: str = "US") -> PhoneValidationResponse:
    phone = require_text(phone, "phone", max_length=64)
    digits = re.sub(r"\D", "", phone)
    return PhoneValidationResponse(
        phone=phone,
        clean_phone=digits,
        is_valid=10 <= len(digits) <= 15,
        country=country.upper(),
        type=detect_phone_type(digits),
    )


def hex_to_rgb(color: str) -> RGB:
    value = color.lstrip("#")
    return RGB(r=int(value[0:2], 16), g=int(value[2:4], 16), b=int(value[4:6], 16))


def build_palette(theme: str = "vibrant", count: int = 5) -> PaletteResponse:
    """Named palette (unknown themes fall back to ``vibrant``), truncated to ``count`` colors."""
    colors = PALETTES.get(theme.lower(), PALETTES["vibrant"])[: max(0, count)]
    return PaletteResponse(
        theme=theme,
        colors=[
            ColorInfo(color=color, hex=color, rgb=hex_to_rgb(color), name=COLOR_ROLES[index])
            for index, color in enumerate(colors)
        ],
        count=len(colors),
    )


def convert_currency(amount: float | None, source: str = "USD", target: str = "EUR") -> CurrencyResponse:
    if amount is None:
        raise ValidationAppError(
            code="missing_parameter",
            message='Parameter "amount" is required and must be a number',
            details={"parameter": "amount"},
        )
    source, target = source.upper(), target.upper()
    rate = EXCHANGE_RATES.get(f"{source}-{target}", 1.0)
    return CurrencyResponse(
        amount=amount,
        source_currency=source,
        to=target,
        rate=rate,
        converted=round(amount * rate, 2),
    )


def demo_weather(city: str = "New York", units: str = "metric", rng: random.Random | None = None) -> WeatherResponse:
    """Random demo weather; a fresh reading per call, so never cached."""
    rng = rng or random.Random()
    return WeatherResponse(
        weather=WeatherInfo(
            city=city,
            temperature=rng.randint(10, 40),
            humidity=rng.randint(40, 100),
            wind_speed=rng.randint(5, 25),
            description=rng.choice(WEATHER_DESCRIPTIONS),
            icon="01d",
            units=units,
        )
    )


def generate_uuids(count: int = 1) -> UUIDResponse:
    count = max(1, min(count, MAX_UUIDS))
    uuids = [str(uuid.uuid4()) for _ in range(count)]
    return UUIDResponse(count=len(uuids), uuids=uuids)
