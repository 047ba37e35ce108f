"""
Input validation utilities
"""
import re
from typing import Optional, Tuple

# Video ids are 11 URL-safe base64 characters
VIDEO_ID_PATTERN = re.compile(r'^[A-Za-z0-9_-]{11}$')
BROWSE_ID_PATTERN = re.compile(r'^[A-Za-z0-9_-]+$')

MAX_QUERY_LENGTH = 500


def validate_search_query(query: str) -> Tuple[bool, Optional[str]]:
    """
    Validate a search query

    Args:
        query: Free-text query

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not query or not query.strip():
        return False, "Search query cannot be empty"

    if len(query) > MAX_QUERY_LENGTH:
        return False, f"Search query too long (max {MAX_QUERY_LENGTH} characters)"

    return True, None


def validate_browse_id(browse_id: str) -> Tuple[bool, Optional[str]]:
    """
    Validate a browse identifier

    Browse ids are opaque; only the character set is checked.

    Args:
        browse_id: Browse identifier (e.g. "MPREb_...", "VLPL...")

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not browse_id:
        return False, "Browse id cannot be empty"

    if not BROWSE_ID_PATTERN.match(browse_id):
        return False, f"Invalid browse id: {browse_id}"

    return True, None


def validate_video_id(video_id: str) -> Tuple[bool, Optional[str]]:
    """
    Validate a video identifier

    Args:
        video_id: YouTube video id

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not video_id:
        return False, "Video id cannot be empty"

    if not VIDEO_ID_PATTERN.match(video_id):
        return False, f"Invalid video id format: {video_id}"

    return True, None
