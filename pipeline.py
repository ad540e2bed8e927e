"""
Listing analysis pipeline — the single entry point callers use.

  request ─► build_prompt ─► provider[0] ─┬─ ok ─► normalize ─► classify ─► listing
                             provider[1] ◄┘ fail
                             ...
                             all failed ─► AllProvidersFailedError

Providers are tried one at a time, each at most once, with the same prompt
and images. The first provider whose text parses as JSON wins.
"""
from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional, Sequence

import config
from errors import AllProvidersFailedError, InputError, NoProviderConfiguredError
from listing import AnalysisRequest, CanonicalListing
from normalizer import ListingParseError, normalize_listing, parse_listing_json
from prompt_builder import build_prompt
from providers.base import ErrorKind, ProviderError, VisionProvider
from shipping import classify_packaging

logger = logging.getLogger(__name__)


def apply_price_adjustment(listing: CanonicalListing, pct: float) -> CanonicalListing:
    """Scale both prices by (1 + pct/100). pct == 0 returns the listing unchanged."""
    if not pct:
        return listing
    factor = 1 + pct / 100
    return replace(
        listing,
        price_low=round(listing.price_low * factor, 2),
        price_high=round(listing.price_high * factor, 2),
    )


def _candidates(providers: Sequence[VisionProvider]) -> list[VisionProvider]:
    """
    Drop providers without credentials. A lone provider is kept regardless so
    that its auth failure is reported instead of a generic config error.
    """
    if len(providers) == 1:
        return list(providers)

    usable = []
    for p in providers:
        if p.has_credentials:
            usable.append(p)
        else:
            logger.info("[%s] Skipped — no API key configured", p.full_name)

    if not usable:
        names = ", ".join(p.full_name for p in providers)
        raise NoProviderConfiguredError(
            "No AI provider has an API key configured",
            f"Configured providers: {names}",
        )
    return usable


async def analyze_listing(
    request: AnalysisRequest,
    providers: Optional[Sequence[VisionProvider]] = None,
) -> CanonicalListing:
    """
    Turn photos into a complete CanonicalListing.

    Raises:
        InputError                 no images in the request
        NoProviderConfiguredError  nothing to try
        AllProvidersFailedError    every attempted provider failed
    """
    if not request.images:
        raise InputError("No images provided")

    if providers is None:
        from providers.manager import build_providers
        providers = build_providers()
    if not providers:
        raise NoProviderConfiguredError()

    candidates = _candidates(providers)

    instruction = build_prompt(
        region=request.region,
        extra_info=request.extra_info,
        spicy_mode=request.spicy_mode,
        premium_mode=request.premium_mode,
        image_labels=request.image_labels,
    )

    failures: list[ProviderError] = []
    for provider in candidates:
        logger.info("[%s] Analysing %d image(s)…", provider.full_name, len(request.images))
        try:
            raw = await provider.analyze(request.images, instruction)
            data = parse_listing_json(raw.text)
        except ProviderError as exc:
            if not exc.provider:
                exc.provider = provider.full_name
            logger.warning("[%s] Failed: %s — %s", provider.full_name, exc.kind.value, exc.detail)
            failures.append(exc)
            continue
        except ListingParseError as exc:
            logger.warning("[%s] Failed: unparseable response — %s", provider.full_name, exc)
            failures.append(ProviderError(ErrorKind.MALFORMED_BODY, str(exc), provider.full_name))
            continue

        logger.info("[%s] OK — latency=%dms", provider.full_name, raw.latency_ms)

        listing = normalize_listing(data, request.spicy_mode, request.premium_mode)
        listing = apply_price_adjustment(listing, config.PRICE_ADJUSTMENT_PCT)
        listing.recommended_packaging = classify_packaging(
            listing.dimensions, listing.weight, listing.fragility,
        )
        listing.provider_used = provider.full_name
        return listing

    logger.error("All %d provider(s) failed", len(failures))
    raise AllProvidersFailedError(failures)
