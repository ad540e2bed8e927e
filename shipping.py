"""
Packaging recommendation from estimated size, weight and fragility.

Tiers are ordered smallest → largest. That order is used twice:
  1. search   — the first tier the padded item fits in wins
  2. escalate — high-fragility items move one step further along it
"""
from __future__ import annotations

from dataclasses import dataclass

from listing import Dimensions, Weight

# Added to each of length / width / height before fitting
PADDING_CM = 3


@dataclass(frozen=True)
class PackagingTier:
    name: str
    max_length: float
    max_width: float
    max_height: float
    max_grams: float
    price: float

    def fits(self, length: float, width: float, height: float, grams: float) -> bool:
        return (
            length <= self.max_length
            and width <= self.max_width
            and height <= self.max_height
            and grams <= self.max_grams
        )


TIERS: tuple[PackagingTier, ...] = (
    PackagingTier("large-letter",  24,  16,  3,   750,   0.85),
    PackagingTier("small-parcel",  45,  35,  16,  2000,  1.20),
    PackagingTier("medium-parcel", 61,  46,  46,  20000, 2.50),
    PackagingTier("large-parcel",  999, 999, 999, 30000, 4.00),
)

REASON_BEST_FIT = "Best fit with padding"
REASON_FRAGILE  = "Upsized for fragile item"


@dataclass(frozen=True)
class PackagingRecommendation:
    tier: str
    price: float
    reason: str

    def to_dict(self) -> dict:
        return {"tier": self.tier, "price": self.price, "reason": self.reason}


def base_tier_index(length: float, width: float, height: float, grams: float) -> int:
    """Index of the smallest tier the padded item fits in (last tier if none)."""
    padded = (length + PADDING_CM, width + PADDING_CM, height + PADDING_CM)
    for i, tier in enumerate(TIERS):
        if tier.fits(*padded, grams):
            return i
    return len(TIERS) - 1


def classify_packaging(dimensions: Dimensions, weight: Weight, fragility: str) -> PackagingRecommendation:
    index = base_tier_index(dimensions.length, dimensions.width, dimensions.height, weight.grams)

    escalated = fragility == "high" and index < len(TIERS) - 1
    if escalated:
        index += 1

    tier = TIERS[index]
    return PackagingRecommendation(
        tier=tier.name,
        price=tier.price,
        reason=REASON_FRAGILE if escalated else REASON_BEST_FIT,
    )
