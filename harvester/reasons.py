"""Explain why a job matched, from its title and detail-page text."""
from __future__ import annotations

from harvester.models import RawListing

SKILL_RULES: list[tuple[list[str], str]] = [
    (
        ["social media", "social-media", "instagram", "tiktok", "facebook",
         "x (formerly twitter)", "community manager"],
        "Direct social media and community management responsibilities",
    ),
    (
        ["content creation", "content strategy", "copywriting", "storytelling",
         "blog", "newsletter"],
        "High volume content creation and storytelling focus",
    ),
    (
        ["video", "filming", "videography", "premiere pro", "after effects",
         "motion graphics"],
        "Video production/editing skills explicitly requested",
    ),
    (
        ["wordpress", "cms", "content management system"],
        "WordPress / CMS publishing experience highlighted",
    ),
    (
        ["seo", "search engine", "organic traffic", "keyword research"],
        "SEO optimisation responsibilities included",
    ),
    (
        ["campaign", "go-to-market", "marketing campaign", "campaign planning"],
        "Owns campaign planning and execution",
    ),
    (
        ["adobe", "photoshop", "illustrator", "lightroom", "graphic design"],
        "Graphic design & Adobe Creative Suite skills required",
    ),
    (
        ["video editing", "davinci resolve", "final cut"],
        "Hands-on video editing deliverables",
    ),
    (
        ["analytics", "google analytics", "reporting", "data driven"],
        "Performance analytics & reporting responsibilities",
    ),
]


def build_match_reasons(listing: RawListing, detail_text: str) -> list[str]:
    reasons = [f"Matches {listing.search.label}"]
    corpus = f"{listing.title} {detail_text}".lower()
    for keywords, reason in SKILL_RULES:
        if any(k in corpus for k in keywords):
            reasons.append(reason)
    return list(dict.fromkeys(reasons))
