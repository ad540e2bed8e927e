"""
Instruction prompt shared by every vision provider.

build_prompt() is pure: the same (region, notes, labels, tone, premium) always gives
the same string, so the exact prompt sent to provider N+1 after provider N
fails is identical.
"""
from __future__ import annotations

from typing import Optional, Sequence

# region code → (currency name, symbol)
_CURRENCIES: dict[str, tuple[str, str]] = {
    "UK": ("GBP", "£"),
    "GB": ("GBP", "£"),
    "US": ("USD", "$"),
    "EU": ("EUR", "€"),
    "IE": ("EUR", "€"),
    "DE": ("EUR", "€"),
    "FR": ("EUR", "€"),
    "CA": ("CAD", "$"),
    "AU": ("AUD", "$"),
}

_INTRO = """You are "SpicyBrain", an expert online reseller with 10+ years of experience on eBay, Vinted, Depop and Facebook Marketplace. You know current market values, pricing trends AND shipping logistics.

Analyse the attached item photo(s) and generate a complete listing package for the {region} market.

PRICING: identify the exact item (brand, model, edition, size, colour, condition), think about what similar items ACTUALLY SELL FOR in the {region} market (not asking prices), and price realistically in {currency}. Be conservative: it is better to sell quickly at fair value than sit unsold.

SHIPPING: estimate the physical properties of the item as it would be packed:
- dimensions: length, width, height in centimetres, with a 0-100 confidence score
- weight: grams, with a 0-100 confidence score
- material: primary material composition, e.g. "plastic housing with metal internals"
- fragility: "low" (books, clothing), "medium" (electronics, wood) or "high" (glass, ceramics, antiques)

Reference sizes: smartphone ~15x7x1cm 180g; paperback ~20x13x2cm 300g; folded t-shirt ~30x25x3cm 200g; coffee mug ~10x10x10cm 350g; laptop ~35x25x2cm 1500g; boxed shoes ~35x25x15cm 1000g."""

_SCHEMA = """Return ONLY a valid JSON object — no markdown, no code fences, no prose — with exactly these keys:
{{
  "title":       "keyword-rich listing title (brand, model, colour, key features)",
  "description": "friendly, honest description with bullet points for features",
  "condition":   "New with tags / Excellent / Very good / Good / Fair, mentioning visible flaws",
  "category":    "primary marketplace category",
  "rarity":      "{rarity}",{spicy_field}
  "priceLow":    number in {currency} (realistic low end),
  "priceHigh":   number in {currency} (realistic high end),
  "dimensions":  {{"length": number, "width": number, "height": number, "confidence": number}},
  "weight":      {{"grams": number, "confidence": number}},
  "material":    "primary material composition",
  "fragility":   "low | medium | high"{premium_fields}
}}"""

_SPICY_FIELD = '\n  "spicyComment": "one witty British roast or hype line about the item",'

_PREMIUM_FIELDS = """,
  "marketInsights":  "demand, saturation and price trend for this item",
  "listingStrategy": "auction vs buy-it-now, pricing and presentation strategy",
  "platformTips":    "best platform and timing to list this item\""""

_SPICY_TONE = (
    "SPICY MODE ACTIVE: be witty, British and entertaining. Roast junk, hype "
    "valuable finds, and assign a creative rarity tier."
)
_PLAIN_TONE = "PROFESSIONAL MODE: keep it clean, factual and businesslike."

_PREMIUM = """PREMIUM ANALYSIS REQUIRED:
- Research recent {region} sold prices for comparable items and reflect them in priceLow/priceHigh
- Assess market saturation and demand level
- Recommend listing format, timing and strategy
- Give one concrete platform tip to get more for the item"""


def currency_for(region: str) -> str:
    code = (region or "").strip().upper()
    if code in _CURRENCIES:
        name, symbol = _CURRENCIES[code]
        return f"{name} ({symbol})"
    return "local currency"


def build_prompt(
    region: str,
    extra_info: Optional[str] = None,
    spicy_mode: bool = True,
    premium_mode: bool = False,
    image_labels: Sequence[str] = (),
) -> str:
    """Assemble the full instruction string sent alongside the images."""
    region = (region or "").strip().upper() or "UK"
    currency = currency_for(region)

    parts = [
        _INTRO.format(region=region, currency=currency),
        _SCHEMA.format(
            rarity="Common | Uncommon | Rare | Epic | Legendary | God-Tier",
            spicy_field=_SPICY_FIELD if spicy_mode else "",
            currency=currency,
            premium_fields=_PREMIUM_FIELDS if premium_mode else "",
        ),
    ]

    labelled = [
        f"Image {i}: {label.strip()}"
        for i, label in enumerate(image_labels, start=1)
        if label and label.strip()
    ]
    if labelled:
        parts.append("Image context from seller:\n" + "\n".join(labelled))

    if extra_info and extra_info.strip():
        parts.append(
            f'Additional context from seller: "{extra_info}"\n'
            "Use it to improve accuracy. If they mention an original purchase "
            "price, account for depreciation realistically."
        )

    parts.append(_SPICY_TONE if spicy_mode else _PLAIN_TONE)

    if premium_mode:
        parts.append(_PREMIUM.format(region=region))

    parts.append("Respond ONLY with valid JSON.")
    return "\n\n".join(parts)
