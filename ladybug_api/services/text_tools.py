"""Deterministic text and number transforms.

Every function here is pure: the same inputs always produce the same payload
(apart from the timestamp), which is what makes the routes cacheable.
"""

from __future__ import annotations

import base64
import hashlib
import json
import re
from collections import Counter

from ladybug_api.core.errors import ValidationAppError
from ladybug_api.schemas.ai import GrammarResponse, KeywordItem, KeywordResponse, SentimentResponse
from ladybug_api.schemas.tools import (
    Base64Response,
    HashResponse,
    JsonFormatResponse,
    JsonSizeInfo,
    MorseResponse,
    RomanResponse,
    SizeInfo,
)
from ladybug_api.services.inputs import require_choice, require_text

HASH_ALGORITHMS = ("md5", "sha1", "sha256", "sha512")

MORSE_CODE: dict[str, str] = {
    "A": ".-", "B": "-...", "C": "-.-.", "D": "-..", "E": ".", "F": "..-.",
    "G": "--.", "H": "....", "I": "..", "J": ".---", "K": "-.-", "L": ".-..",
    "M": "--", "N": "-.", "O": "---", "P": ".--.", "Q": "--.-", "R": ".-.",
    "S": "...", "T": "-", "U": "..-", "V": "...-", "W": ".--", "X": "-..-",
    "Y": "-.--", "Z": "--..",
    "0": "-----", "1": ".----", "2": "..---", "3": "...--", "4": "....-",
    "5": ".....", "6": "-....", "7": "--...", "8": "---..", "9": "----.",
    ".": ".-.-.-", ",": "--..--", "?": "..--..", "'": ".----.", "!": "-.-.--",
    "/": "-..-.", "(": "-.--.", ")": "-.--.-", "&": ".-...", ":": "---...",
    ";": "-.-.-.", "=": "-...-", "+": ".-.-.", "-": "-....-", "_": "..--.-",
    '"': ".-..-.", "$": "...-..-", "@": ".--.-.",
}
MORSE_DECODE: dict[str, str] = {code: char for char, code in MORSE_CODE.items()}
MORSE_WORD_SEPARATOR = " / "

_ROMAN_NUMERALS: tuple[tuple[int, str], ...] = (
    (1000, "M"), (900, "CM"), (500, "D"), (400, "CD"),
    (100, "C"), (90, "XC"), (50, "L"), (40, "XL"),
    (10, "X"), (9, "IX"), (5, "V"), (4, "IV"), (1, "I"),
)
_CANONICAL_ROMAN = re.compile(r"^M{0,3}(CM|CD|D?C{0,3})(XC|XL|L?X{0,3})(IX|IV|V?I{0,3})$")

POSITIVE_WORDS = ("good", "great", "excellent", "amazing", "wonderful", "fantastic", "love", "happy", "joy", "perfect")
NEGATIVE_WORDS = ("bad", "terrible", "awful", "horrible", "hate", "sad", "angry", "worst", "disappointed", "fail")

STOP_WORDS = frozenset(
    {
        "the", "and", "for", "are", "but", "not", "you", "all", "can", "had", "her",
        "was", "one", "our", "out", "day", "get", "has", "him", "his", "how", "its",
        "may", "new", "now", "old", "see", "two", "way", "who", "boy", "did", "she",
        "use", "than", "when", "make", "time", "this", "that", "with", "from", "have",
    }
)
MAX_KEYWORDS = 20


def _round_half_up(value: float) -> int:
    return int(value + 0.5) if value >= 0 else -int(-value + 0.5)


def hash_text(text: str | None, algorithm: str = "sha256") -> HashResponse:
    """Hex digest of ``text`` with one of md5/sha1/sha256/sha512."""
    text = require_text(text, "text")
    algorithm = require_choice(algorithm, "algorithm", HASH_ALGORITHMS)
    digest = hashlib.new(algorithm, text.encode("utf-8")).hexdigest()
    return HashResponse(text=text, algorithm=algorithm, hash=digest)


def encode_morse(text: str) -> str:
    words = []
    for word in text.upper().split():
        codes = []
        for char in word:
            code = MORSE_CODE.get(char)
            if code is None:
                raise ValidationAppError(
                    code="unsupported_character",
                    message=f"Character '{char}' has no Morse code representation",
                    details={"parameter": "text"},
                )
            codes.append(code)
        words.append(" ".join(codes))
    return MORSE_WORD_SEPARATOR.join(words)


def decode_morse(code: str) -> str:
    words = []
    for word in re.split(r"\s*/\s*", code.strip()):
        chars = []
        for symbol in word.split():
            char = MORSE_DECODE.get(symbol)
            if char is None:
                raise ValidationAppError(
                    code="invalid_morse_code",
                    message=f"Unknown Morse sequence '{symbol}'",
                    details={"parameter": "text"},
                )
            chars.append(char)
        if chars:
            words.append("".join(chars))
    return " ".join(words)


def convert_morse(text: str | None, action: str = "encode") -> MorseResponse:
    """Encode text to Morse (letters space-separated, words split by ``/``) or decode it back."""
    text = require_text(text, "text", max_length=1000)
    action = require_choice(action, "action", ("encode", "decode"))
    output = encode_morse(text) if action == "encode" else decode_morse(text)
    return MorseResponse(action=action, input=text, output=output)


def int_to_roman(number: int) -> str:
    if not 1 <= number <= 3999:
        raise ValidationAppError(
            code="number_out_of_range",
            message="Roman numerals are supported for numbers between 1 and 3999",
            details={"parameter": "number"},
        )
    parts = []
    for value, numeral in _ROMAN_NUMERALS:
        count, number = divmod(number, value)
        parts.append(numeral * count)
    return "".join(parts)


def roman_to_int(roman: str) -> int:
    numeral = roman.strip().upper()
    if not numeral or not _CANONICAL_ROMAN.match(numeral):
        raise ValidationAppError(
            code="invalid_roman_numeral",
            message=f"'{roman}' is not a valid Roman numeral",
            details={"parameter": "roman"},
        )
    total = 0
    index = 0
    for value, symbol in _ROMAN_NUMERALS:
        while numeral.startswith(symbol, index):
            total += value
            index += len(symbol)
    return total


def convert_roman(number: int | None = None, roman: str | None = None) -> RomanResponse:
    """Convert in whichever direction was requested; exactly one input is required."""
    if (number is None) == (roman is None or not roman.strip()):
        raise ValidationAppError(
            code="invalid_parameter",
            message='Provide exactly one of "number" or "roman"',
            details={"hint": "e.g. /tools/roman?number=2024 or /tools/roman?roman=MMXXIV"},
        )
    if number is not None:
        return RomanResponse(number=number, roman=int_to_roman(number))
    value = roman_to_int(roman or "")
    return RomanResponse(number=value, roman=int_to_roman(value))


def convert_base64(text: str | None, action: str = "encode") -> Base64Response:
    """Base64-encode UTF-8 text, or decode it; undecodable input yields ``"Invalid base64 string"``."""
    text = require_text(text, "text")
    action = require_choice(action, "action", ("encode", "decode"))

    if action == "encode":
        output = base64.b64encode(text.encode("utf-8")).decode("ascii")
    else:
        try:
            output = base64.b64decode(text, validate=True).decode("utf-8")
        except ValueError:
            # binascii.Error, UnicodeDecodeError and non-ASCII input all derive from ValueError
            output = "Invalid base64 string"

    return Base64Response(
        action=action,
        input=text,
        output=output,
        size=SizeInfo(input=len(text), output=len(output)),
    )


def format_json(raw: str | None, indent: int = 2) -> JsonFormatResponse:
    """Pretty-print JSON; invalid JSON is echoed back with ``isValid`` false."""
    if raw is None or not raw.strip():
        raise ValidationAppError(
            code="missing_parameter",
            message='Parameter "json" is required and cannot be empty',
            details={"parameter": "json"},
        )

    try:
        formatted = json.dumps(json.loads(raw), indent=indent, ensure_ascii=False)
        is_valid = True
    except json.JSONDecodeError:
        formatted = raw
        is_valid = False

    return JsonFormatResponse(
        original=raw,
        formatted=formatted,
        is_valid=is_valid,
        indent=indent,
        size=JsonSizeInfo(original=len(raw), formatted=len(formatted)),
    )


def analyze_sentiment(text: str | None) -> SentimentResponse:
    """Keyword-count sentiment: each net positive/negative word moves the score by 20.

    Keywords are matched as substrings, not whole words, so "badge" counts as
    "bad" and "unhappy" as "happy". Published scores depend on this behaviour.
    """
    text = require_text(text, "text", max_length=5000)
    lowered = text.lower()
    positive = sum(1 for word in POSITIVE_WORDS if word in lowered)
    negative = sum(1 for word in NEGATIVE_WORDS if word in lowered)

    score = max(-100, min(100, (positive - negative) * 20))
    if score > 0:
        sentiment = "positive"
    elif score < 0:
        sentiment = "negative"
    else:
        sentiment = "neutral"

    return SentimentResponse(text=text, sentiment=sentiment, score=score, confidence=abs(score))


def check_grammar(text: str | None) -> GrammarResponse:
    text = require_text(text, "text", max_length=5000)

    issues = []
    if re.search(r"\s\s+", text):
        issues.append("Multiple spaces detected")
    if not re.match(r"^[A-Z]", text):
        issues.append("Missing capitalization at start")
    if not re.search(r"[.!?]$", text):
        issues.append("Missing punctuation at end")

    corrected = re.sub(r"[ \t]{2,}", " ", text)
    corrected = corrected[:1].upper() + corrected[1:]
    if not re.search(r"[.!?]$", corrected):
        corrected += "."

    return GrammarResponse(
        original=text,
        corrected=corrected,
        issues=issues,
        score=max(0, 100 - len(issues) * 10),
    )


def extract_keywords(text: str | None, max_keywords: int = 10) -> KeywordResponse:
    """Most frequent words longer than three letters, stop words excluded."""
    text = require_text(text, "text", max_length=10000)
    max_keywords = max(1, min(max_keywords, MAX_KEYWORDS))

    words = [word for word in re.sub(r"[^\w\s]", "", text.lower()).split() if len(word) > 3]
    filtered = [word for word in words if word not in STOP_WORDS]
    counts = Counter(filtered)

    keywords = [
        KeywordItem(
            keyword=word,
            frequency=count,
            relevance=_round_half_up(count / len(filtered) * 100),
        )
        for word, count in counts.most_common(max_keywords)
    ]

    return KeywordResponse(
        text=text,
        keywords=keywords,
        total_words=len(words),
        unique_keywords=len(counts),
    )
