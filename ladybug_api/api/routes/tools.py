from fastapi import APIRouter, Query

from ladybug_api.api.cached_route import CachedRoute
from ladybug_api.schemas.tools import Base64Response, HashResponse, JsonFormatResponse, MorseResponse, RomanResponse
from ladybug_api.services import text_tools

router = APIRouter(tags=["Tools"], route_class=CachedRoute)


@router.get("/tools/hash", response_model=HashResponse)
async def hash_text(
    text: str | None = Query(None, description="Text to hash"),
    algorithm: str = Query("sha256", description="md5, sha1, sha256 or sha512"),
) -> HashResponse:
    """Return the hex digest of the given text."""
    return text_tools.hash_text(text, algorithm)


@router.get("/tools/morse", response_model=MorseResponse)
async def morse(
    text: str | None = Query(None, description="Plain text to encode, or Morse code to decode"),
    action: str = Query("encode", description="encode or decode"),
) -> MorseResponse:
    """Translate between plain text and Morse code.

    Letters are separated by a space and words by `` / ``.
    """
    return text_tools.convert_morse(text, action)


@router.get("/tools/roman", response_model=RomanResponse)
async def roman(
    number: int | None = Query(None, ge=1, le=3999, description="Number to convert to a Roman numeral"),
    roman: str | None = Query(None, description="Roman numeral to convert to a number"),
) -> RomanResponse:
    """Convert a number to a Roman numeral or back; provide exactly one parameter."""
    return text_tools.convert_roman(number=number, roman=roman)


@router.get("/dev/base64-encoder", response_model=Base64Response)
async def base64_encoder(
    text: str | None = Query(None, description="Text to encode, or base64 to decode"),
    action: str = Query("encode", description="encode or decode"),
) -> Base64Response:
    return text_tools.convert_base64(text, action)


@router.get("/dev/json-formatter", response_model=JsonFormatResponse)
async def json_formatter(
    json: str | None = Query(None, description="JSON document to pretty-print"),
    indent: int = Query(2, ge=0, le=10, description="Indentation width"),
) -> JsonFormatResponse:
    """Pretty-print a JSON document; invalid JSON is returned unchanged with isValid=false."""
    return text_tools.format_json(json, indent)
