from fastapi import APIRouter, Query

from ladybug_api.api.cached_route import CachedRoute
from ladybug_api.schemas.business import (
    CurrencyResponse,
    EmailValidationResponse,
    PaletteResponse,
    PhoneValidationResponse,
)
from ladybug_api.services import business

router = APIRouter(tags=["Business"], route_class=CachedRoute)


@router.get("/business/email-validator", response_model=EmailValidationResponse)
async def email_validator(email: str | None = Query(None, description="Email address to check")) -> EmailValidationResponse:
    """Syntactic email check plus a disposable-domain lookup (no DNS or SMTP probing)."""
    return business.validate_email(email)


@router.get("/business/phone-validator", response_model=PhoneValidationResponse)
async def phone_validator(
    phone: str | None = Query(None, description="Phone number in any format"),
    country: str = Query("US", description="ISO country code, echoed back"),
) -> PhoneValidationResponse:
    return business.validate_phone(phone, country)


@router.get("/business/color-palette", response_model=PaletteResponse)
async def color_palette(
    theme: str = Query("vibrant", description="vibrant, pastel, dark, nature, ocean or sunset"),
    count: int = Query(5, ge=1, le=5, description="Number of colors"),
) -> PaletteResponse:
    return business.build_palette(theme, count)


@router.get("/data/currency-converter", response_model=CurrencyResponse)
async def currency_converter(
    amount: float | None = Query(None, description="Amount to convert"),
    source: str = Query("USD", alias="from", description="Source currency code"),
    to: str = Query("EUR", description="Target currency code"),
) -> CurrencyResponse:
    """Convert using fixed demonstration rates; unknown pairs convert 1:1."""
    return business.convert_currency(amount, source, to)
