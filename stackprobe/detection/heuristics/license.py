"""License text classifier."""

from typing import Optional

from stackprobe.detection.patterns import LICENSE_PATTERNS


def classify(content: str) -> Optional[str]:
    """Return the license id whose regexes all match `content`.

    Matching is conjunctive, so a bare "Apache" mention does not pass for
    the 2.0 grant. Table order decides between multiple full matches.
    """
    lower = content.lower()
    for license_id, patterns in LICENSE_PATTERNS.items():
        if all(pattern.search(lower) for pattern in patterns):
            return license_id
    return None
