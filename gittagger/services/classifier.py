"""
Commit message classification for gittagger.

Maps a commit message to an IncrementDirective. Rules are checked in
order and the first match wins (all matching is case-sensitive):

1. "BREAKING CHANGE" anywhere in the message  -> major
2. message starts with "feat"                 -> minor
3. message starts with "fix"                  -> patch
4. a "vX.Y.Z" literal anywhere in the message -> that exact version
5. anything else                              -> patch

Rules 4 and 5 log a notice at INFO.
"""

import logging
import re

from ..domain.commit import DirectiveReason, IncrementDirective
from ..domain.version import IncrementLevel, SemanticVersion

logger = logging.getLogger(__name__)

BREAKING_CHANGE_MARKER = "BREAKING CHANGE"
FEATURE_PREFIX = "feat"
FIX_PREFIX = "fix"
EMBEDDED_VERSION_PATTERN = re.compile(r'v\d+\.\d+\.\d+')


def _keyword_directive(message: str):
    if BREAKING_CHANGE_MARKER in message:
        return IncrementDirective.for_level(IncrementLevel.MAJOR, DirectiveReason.BREAKING_CHANGE)
    if message.startswith(FEATURE_PREFIX):
        return IncrementDirective.for_level(IncrementLevel.MINOR, DirectiveReason.FEATURE)
    if message.startswith(FIX_PREFIX):
        return IncrementDirective.for_level(IncrementLevel.PATCH, DirectiveReason.FIX)
    return None


def extract_version(message: str):
    """Return the first "vX.Y.Z" literal in a message, or None."""
    match = EMBEDDED_VERSION_PATTERN.search(message)
    if match is None:
        return None
    return SemanticVersion.parse(match.group(0))


def classify(message: str) -> IncrementDirective:
    """
    Classify a commit message.

    Args:
        message: Full commit message

    Returns:
        IncrementDirective carrying either a level or an explicit version
    """
    directive = _keyword_directive(message)
    if directive is not None:
        return directive

    version = extract_version(message)
    if version is not None:
        logger.info(f"Found version {version} in commit message; using it instead of incrementing.")
        return IncrementDirective.explicit(version)

    subject = message.split('\n', 1)[0]
    logger.info(f"Unrecognized commit message: \"{subject}\". Defaulting to patch update.")
    return IncrementDirective.for_level(IncrementLevel.PATCH, DirectiveReason.DEFAULT)

