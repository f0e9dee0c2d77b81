"""Rating cells such as ``★ 4,2 – Bardzo dobry (≈ 698 opinii)`` or ``4.29/5 (56 recenzji)``."""

import re

from pydantic import BaseModel, ConfigDict, Field

from display.numbers import parse_float

DEFAULT_MAX_STARS = 5

STAR_RE = re.compile(
    r"★\s*([0-9,.]+)(?:/([0-9,.]+))?\s*(?:[–-]\s*([^(]+))?\s*(?:\(≈?\s*([0-9,.]+)\s*([^)]+)\))?",
    re.IGNORECASE,
)
SCORE_RE = re.compile(
    r"([0-9,.]+)/([0-9,.]+)(?:\s*\(([0-9,.]+)\s*([^)]+)\))?",
    re.IGNORECASE,
)


class ParsedRating(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    stars: float | None = None
    max_stars: float | None = Field(default=None, alias="maxStars")
    score: float | None = None
    review_count: int | None = Field(default=None, alias="reviewCount")
    description: str | None = None
    raw_string: str | None = Field(default=None, alias="rawString")

    @property
    def has_score(self) -> bool:
        return bool(self.stars or self.score)

    @property
    def normalized_stars(self) -> float:
        """Rating scaled to a five-star display."""
        value = self.stars or self.score or 0
        max_stars = self.max_stars or DEFAULT_MAX_STARS
        return value / max_stars * 5


def _decimal(text: str | None) -> float | None:
    if not text:
        return None
    return parse_float(text.replace(",", ".", 1))


def _review_count(text: str | None) -> int | None:
    if not text:
        return None
    count = parse_float(re.sub(r"[,.]", "", text))
    return None if count is None else int(count)


def review_label(count: int) -> str:
    return "opinia" if count == 1 else "opinii"


def parse_rating(value: str | None) -> ParsedRating | None:
    """Parse a rating cell; anything unrecognised is kept as ``raw_string``."""
    if not value or not value.strip():
        return None

    text = value.strip()

    star_match = STAR_RE.search(text)
    if star_match:
        score_text, max_text, description, count_text, _ = star_match.groups()
        score = _decimal(score_text)
        max_stars = _decimal(max_text) if max_text else DEFAULT_MAX_STARS
        return ParsedRating(
            stars=score,
            max_stars=max_stars,
            score=score,
            description=description.strip() if description else None,
            review_count=_review_count(count_text),
            raw_string=text,
        )

    score_match = SCORE_RE.search(text)
    if score_match:
        score_text, max_text, count_text, _ = score_match.groups()
        score = _decimal(score_text)
        return ParsedRating(
            score=score,
            max_stars=_decimal(max_text),
            stars=score,
            review_count=_review_count(count_text),
            raw_string=text,
        )

    return ParsedRating(raw_string=text)
