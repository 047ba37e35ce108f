"""
Utilities package
Logging, JSON navigation helpers and input validation
"""

from .logger import (
    get_logger,
    configure_from_settings,
    setup_logging,
    log_performance,
    get_current_log_file
)
from .helpers import (
    nav,
    nav_list,
    first_present,
    join_runs,
    truncate_string
)
from .validation import (
    validate_search_query,
    validate_browse_id,
    validate_video_id
)

__all__ = [
    # Logger exports
    'get_logger',
    'configure_from_settings',
    'setup_logging',
    'log_performance',
    'get_current_log_file',

    # Helper exports
    'nav',
    'nav_list',
    'first_present',
    'join_runs',
    'truncate_string',

    # Validation exports
    'validate_search_query',
    'validate_browse_id',
    'validate_video_id'
]
