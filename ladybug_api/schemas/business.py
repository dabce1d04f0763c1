"""Pydantic schemas for business and data endpoints."""

from __future__ import annotations

from pydantic import Field

from ladybug_api.schemas.common import ApiModel, ApiResponse


class EmailValidationResponse(ApiResponse):
    email: str
    is_valid: bool
    domain: str | None
    domain_exists: bool
    is_disposable: bool


class PhoneValidationResponse(ApiResponse):
    phone: str
    clean_phone: str
    is_valid: bool
    country: str
    type: str


class RGB(ApiModel):
    r: int
    g: int
    b: int


class ColorInfo(ApiModel):
    color: str
    hex: str
    rgb: RGB
    name: str


class PaletteResponse(ApiResponse):
    theme: str
    colors: list[ColorInfo]
    count: int


class CurrencyResponse(ApiResponse):
    amount: float
    source_currency: str = Field(..., alias="from")
    to: str
    rate: float
    converted: float
    note: str = "Rates are for demonstration only."


class WeatherInfo(ApiModel):
    city: str
    temperature: int
    humidity: int
    wind_speed: int
    description: str
    icon: str
    units: str


class WeatherResponse(ApiResponse):
    weather: WeatherInfo
    note: str = "This is demo weather data."
