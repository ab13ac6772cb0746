"""
Profile completeness scorer.

Awards points for each filled CIP-119 profile field plus validated social
references:

    name 15, objectives 20, motivations 15, qualifications 10, bio 10
    social links: 30 for 2+ validated, 25 for exactly 1

A full profile with two working social links scores 100.
"""

import logging
from typing import Any, Iterable, Mapping, Optional, Union

from drep_scoring.constants import PROFILE_FIELD_POINTS, SOCIAL_POINTS_MULTIPLE, SOCIAL_POINTS_SINGLE
from drep_scoring.schemas.profile import ProfileMetadata
from drep_scoring.utils.url_helpers import is_validated_social_link, normalize_uri

logger = logging.getLogger(__name__)

MetadataLike = Union[ProfileMetadata, Mapping[str, Any], None]


def validated_social_links(metadata: MetadataLike, broken_uris: Optional[Iterable[str]] = None) -> list[str]:
    """Normalized, deduplicated social URIs that are recognised and not broken."""
    profile = ProfileMetadata.from_raw(metadata)
    if profile is None:
        return []
    broken = {normalize_uri(b) for b in broken_uris} if broken_uris else set()

    seen: set[str] = set()
    links: list[str] = []
    for reference in profile.references:
        if not reference.uri:
            continue
        normalized = normalize_uri(reference.uri)
        if normalized in seen:
            continue
        seen.add(normalized)
        if normalized in broken:
            continue
        if is_validated_social_link(normalized):
            links.append(normalized)
    return links


def social_points(link_count: int) -> int:
    if link_count >= 2:
        return SOCIAL_POINTS_MULTIPLE
    if link_count == 1:
        return SOCIAL_POINTS_SINGLE
    return 0


def profile_completeness(metadata: MetadataLike, broken_uris: Optional[Iterable[str]] = None) -> int:
    """Score a profile 0-100. None or empty metadata scores 0."""
    profile = ProfileMetadata.from_raw(metadata)
    if profile is None:
        return 0

    score = 0
    for field_name, points in PROFILE_FIELD_POINTS:
        if profile.text(field_name):
            score += points

    links = validated_social_links(profile, broken_uris)
    score += social_points(len(links))
    logger.debug(f"Profile completeness={score} validated_links={len(links)}")
    return min(100, score)
