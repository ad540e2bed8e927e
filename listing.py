"""
listing.py — canonical data types for one analysis request and its result.

  ImageInput / AnalysisRequest   what the caller hands to the pipeline
  Dimensions / Weight            physical estimates (cm / grams)
  CanonicalListing               the single normalized output shape

parse_request() turns the JSON wire payload into an AnalysisRequest.
"""
from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass, field
from typing import Any, Optional

import config
from errors import InputError

RARITIES = ("Common", "Uncommon", "Rare", "Epic", "Legendary", "God-Tier")
FRAGILITIES = ("low", "medium", "high")


def detect_media_type(data: bytes) -> str:
    """Sniff the image type from its magic bytes (default jpeg)."""
    if data[:8] == b"\x89PNG\r\n\x1a\n":
        return "image/png"
    if data[:4] == b"GIF8":
        return "image/gif"
    if data[:4] == b"RIFF":
        return "image/webp"
    return "image/jpeg"


@dataclass(frozen=True)
class ImageInput:
    """One photo: base64 data exactly as received plus its media type."""
    data: str
    mime_type: str

    def raw_bytes(self) -> bytes:
        return base64.b64decode(self.data)


@dataclass(frozen=True)
class AnalysisRequest:
    images: tuple[ImageInput, ...]
    extra_info: Optional[str] = None
    region: str = "UK"
    spicy_mode: bool = True
    premium_mode: bool = False
    # optional caption per image, same order as images; "" for none
    image_labels: tuple[str, ...] = ()


@dataclass
class Dimensions:
    length: float
    width: float
    height: float
    confidence: float

    def to_dict(self) -> dict:
        return {
            "length": self.length,
            "width": self.width,
            "height": self.height,
            "confidence": self.confidence,
        }


@dataclass
class Weight:
    grams: float
    confidence: float

    def to_dict(self) -> dict:
        return {"grams": self.grams, "confidence": self.confidence}


@dataclass
class CanonicalListing:
    title: str
    description: str
    condition: str
    category: str
    rarity: str
    price_low: float
    price_high: float
    dimensions: Dimensions
    weight: Weight
    material: str
    fragility: str                          # low | medium | high
    spicy_comment: Optional[str] = None     # only in spicy mode
    # premium-only
    market_insights: Optional[str] = None
    listing_strategy: Optional[str] = None
    platform_tips: Optional[str] = None
    # filled in by the pipeline after normalization
    recommended_packaging: Optional[Any] = None
    provider_used: str = ""

    def to_dict(self) -> dict:
        """Serialize with the wire's camelCase keys; unset optional fields are omitted."""
        out: dict[str, Any] = {
            "title": self.title,
            "description": self.description,
            "condition": self.condition,
            "category": self.category,
            "rarity": self.rarity,
        }
        if self.spicy_comment is not None:
            out["spicyComment"] = self.spicy_comment
        out.update({
            "priceLow": self.price_low,
            "priceHigh": self.price_high,
            "dimensions": self.dimensions.to_dict(),
            "weight": self.weight.to_dict(),
            "material": self.material,
            "fragility": self.fragility,
        })
        if self.market_insights is not None:
            out["marketInsights"] = self.market_insights
        if self.listing_strategy is not None:
            out["listingStrategy"] = self.listing_strategy
        if self.platform_tips is not None:
            out["platformTips"] = self.platform_tips
        if self.recommended_packaging is not None:
            out["recommendedPackaging"] = self.recommended_packaging.to_dict()
        out["providerUsed"] = self.provider_used
        return out


# ── Wire payload → AnalysisRequest ────────────────────────────────────────────

def _parse_image(index: int, raw: Any) -> ImageInput:
    if not isinstance(raw, dict):
        raise InputError("Invalid image", f"images[{index}] must be an object")
    data = raw.get("data")
    if not isinstance(data, str) or not data.strip():
        raise InputError("Invalid image", f"images[{index}] has no data")
    data = data.strip()
    # Accept data URLs as produced by FileReader.readAsDataURL
    if data.startswith("data:") and "," in data:
        header, data = data.split(",", 1)
        mime_hint = header[len("data:"):].split(";")[0]
    else:
        mime_hint = ""

    # Reject undecodable data before any provider sees it
    data = "".join(data.split())
    try:
        decoded = base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError):
        raise InputError("Invalid image", f"images[{index}] is not valid base64")
    if not decoded:
        raise InputError("Invalid image", f"images[{index}] has no data")

    mime_type = raw.get("mimeType") or mime_hint
    if not isinstance(mime_type, str) or not mime_type.strip():
        mime_type = detect_media_type(decoded)
    return ImageInput(data=data, mime_type=mime_type.strip())


def _flag(payload: dict, key: str, default: bool) -> bool:
    value = payload.get(key)
    if value is None:
        return default
    if not isinstance(value, bool):
        raise InputError("Invalid request", f"'{key}' must be true or false")
    return value


def _labels(payload: dict, image_count: int) -> tuple[str, ...]:
    raw = payload.get("imageLabels")
    if raw is None:
        return ()
    if not isinstance(raw, list) or not all(isinstance(x, str) or x is None for x in raw):
        raise InputError("Invalid request", "'imageLabels' must be a list of strings")
    if len(raw) > image_count:
        raise InputError(
            "Invalid request",
            f"'imageLabels' has {len(raw)} entries for {image_count} image(s)",
        )
    return tuple((x or "").strip() for x in raw)


def parse_request(payload: Any) -> AnalysisRequest:
    """
    Build an AnalysisRequest from the decoded JSON body:
      { images: [{data, mimeType}], imageLabels?, extraInfo?, isSpicyMode?,
        region?, isPremium? }
    Raises InputError when the payload cannot be used.
    """
    if not isinstance(payload, dict):
        raise InputError("Invalid request", "Request body must be a JSON object")

    images = payload.get("images")
    if images is not None and not isinstance(images, list):
        raise InputError("Invalid request", "'images' must be a list")
    if not images:
        raise InputError("No images provided")

    extra = payload.get("extraInfo")
    extra_info = extra.strip() if isinstance(extra, str) and extra.strip() else None

    region = payload.get("region")
    if not isinstance(region, str) or not region.strip():
        region = config.DEFAULT_REGION

    return AnalysisRequest(
        images=tuple(_parse_image(i, img) for i, img in enumerate(images)),
        extra_info=extra_info,
        region=region.strip().upper(),
        spicy_mode=_flag(payload, "isSpicyMode", True),
        premium_mode=_flag(payload, "isPremium", False),
        image_labels=_labels(payload, len(images)),
    )
