"""
Provider text → CanonicalListing.

Two stages:
  parse_listing_json()  strip code fences and parse; the only step that can fail
  normalize_listing()   field-by-field mapping with fixed defaults; never fails

The normalizer has no idea which provider produced the text.
"""
from __future__ import annotations

import json
import logging
import math
import re
from typing import Any, Optional

from listing import FRAGILITIES, RARITIES, CanonicalListing, Dimensions, Weight

logger = logging.getLogger(__name__)

DEFAULT_TITLE         = "Item for Sale"
DEFAULT_DESCRIPTION   = "Item as shown in photos."
DEFAULT_CONDITION     = "Good condition"
DEFAULT_CATEGORY      = "Other"
DEFAULT_RARITY        = "Common"
DEFAULT_PRICE_LOW     = 5
DEFAULT_PRICE_HIGH    = 10
DEFAULT_MATERIAL      = "Mixed materials"
DEFAULT_FRAGILITY     = "medium"
DEFAULT_DIMENSIONS    = {"length": 15, "width": 10, "height": 5, "confidence": 50}
DEFAULT_WEIGHT        = {"grams": 200, "confidence": 50}
DEFAULT_SPICY_COMMENT = "Let's get this listed!"

DEFAULT_MARKET_INSIGHTS = "No market insights available."
DEFAULT_PLATFORM_TIPS   = "Start with competitive pricing and clear photos for best results!"

# Keyed on the first word of the normalized condition
_LISTING_STRATEGIES = {
    "new":       "Start with Buy It Now at a premium price. High-quality photos essential.",
    "excellent": "Consider both auction and Buy It Now. Emphasise condition in the title.",
    "good":      "Competitive pricing recommended. Highlight functionality over aesthetics.",
    "used":      "Honest condition description builds trust. Price to sell quickly.",
    "poor":      "Parts/repair market. Be transparent about issues.",
}

_RARITY_LOOKUP = {r.lower(): r for r in RARITIES}

# ``` or ```json (any language tag), with or without a newline after it
_LEADING_FENCE = re.compile(r"^```[A-Za-z0-9_-]*\s*")


class ListingParseError(ValueError):
    """Provider text could not be parsed into a JSON object."""


# ── Stage 1: text → dict ──────────────────────────────────────────────────────

def strip_code_fences(raw: str) -> str:
    """
    Remove a leading ``` / ```json line and a trailing ``` if present.
    Plain textual trim, not a markdown parser.
    """
    text = _LEADING_FENCE.sub("", raw.strip(), count=1)
    if text.endswith("```"):
        text = text[:-3]
    return text.strip()


def parse_listing_json(raw: str) -> dict:
    """Raises ListingParseError on anything that is not a JSON object."""
    text = strip_code_fences(raw or "")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        logger.error("Non-JSON provider response: %s", (raw or "")[:300])
        raise ListingParseError(f"JSON parse error: {exc}") from exc
    if not isinstance(data, dict):
        raise ListingParseError(f"Expected a JSON object, got {type(data).__name__}")
    return data


# ── Stage 2: field coercion ───────────────────────────────────────────────────

def _text(value: Any, default: str) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return default


def _number(value: Any) -> Optional[float]:
    """Parse value as a finite number, or None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        result = float(value)
    elif isinstance(value, str):
        cleaned = value.strip().lstrip("£$€").replace(",", "").strip()
        try:
            result = float(cleaned)
        except ValueError:
            return None
    else:
        return None
    return result if math.isfinite(result) else None


def _positive(value: Any, default: float) -> float:
    n = _number(value)
    return n if n is not None and n > 0 else default


def _confidence(value: Any, default: float) -> float:
    n = _number(value)
    return n if n is not None and 0 <= n <= 100 else default


def _price(data: dict, key: str, pricing_key: str, default: float) -> float:
    n = _number(data.get(key))
    if n is not None and n > 0:
        return n
    pricing = data.get("pricing")
    if isinstance(pricing, dict):
        return _positive(pricing.get(pricing_key), default)
    return default


def _dimensions(value: Any) -> Dimensions:
    raw = value if isinstance(value, dict) else {}
    d = DEFAULT_DIMENSIONS
    return Dimensions(
        length=_positive(raw.get("length"), d["length"]),
        width=_positive(raw.get("width"), d["width"]),
        height=_positive(raw.get("height"), d["height"]),
        confidence=_confidence(raw.get("confidence"), d["confidence"]),
    )


def _weight(value: Any) -> Weight:
    raw = value if isinstance(value, dict) else {}
    w = DEFAULT_WEIGHT
    return Weight(
        grams=_positive(raw.get("grams"), w["grams"]),
        confidence=_confidence(raw.get("confidence"), w["confidence"]),
    )


def _rarity(value: Any) -> str:
    if isinstance(value, str):
        return _RARITY_LOOKUP.get(value.strip().lower(), DEFAULT_RARITY)
    return DEFAULT_RARITY


def _fragility(value: Any) -> str:
    if isinstance(value, str) and value.strip().lower() in FRAGILITIES:
        return value.strip().lower()
    return DEFAULT_FRAGILITY


def listing_strategy_for(condition: str) -> str:
    words = condition.split()
    first = words[0].lower() if words else ""
    return _LISTING_STRATEGIES.get(first, _LISTING_STRATEGIES["good"])


def normalize_listing(data: dict, spicy_mode: bool, premium_mode: bool = False) -> CanonicalListing:
    """
    Map a parsed provider object onto the canonical listing.

    Every field is validated on its own; anything absent, wrong-typed or
    invalid is replaced by its default. Packaging and provider_used are left
    for the pipeline to fill in.
    """
    condition = _text(data.get("condition"), DEFAULT_CONDITION)

    listing = CanonicalListing(
        title=_text(data.get("title"), DEFAULT_TITLE),
        description=_text(data.get("description"), DEFAULT_DESCRIPTION),
        condition=condition,
        category=_text(data.get("category"), DEFAULT_CATEGORY),
        rarity=_rarity(data.get("rarity")),
        price_low=_price(data, "priceLow", "startingBid", DEFAULT_PRICE_LOW),
        price_high=_price(data, "priceHigh", "buyItNow", DEFAULT_PRICE_HIGH),
        dimensions=_dimensions(data.get("dimensions")),
        weight=_weight(data.get("weight")),
        material=_text(data.get("material"), DEFAULT_MATERIAL),
        fragility=_fragility(data.get("fragility")),
    )

    if spicy_mode:
        listing.spicy_comment = _text(data.get("spicyComment"), DEFAULT_SPICY_COMMENT)

    if premium_mode:
        listing.market_insights = _text(data.get("marketInsights"), DEFAULT_MARKET_INSIGHTS)
        listing.listing_strategy = _text(data.get("listingStrategy"), listing_strategy_for(condition))
        listing.platform_tips = _text(data.get("platformTips"), DEFAULT_PLATFORM_TIPS)

    return listing
