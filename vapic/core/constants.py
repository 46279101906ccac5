"""Core constants: cache key prefix, header names and shared literal values.

Single source of truth for the header protocol and option defaults.
"""

# Default cache key prefix (CacheKey = prefix + resource path)
DEFAULT_CACHE_PREFIX = "vapic:/"

# Default Cache-Control max-age in seconds (one minute)
DEFAULT_PERMITTED_AGE = 60

# Header protocol: request/response envelope and non-fatal parse warning
VAPIC_HEADER = "vapic"
VAPIC_WARNING_HEADER = "vapic-warning"
CACHE_CONTROL_HEADER = "Cache-Control"

# Envelope field carrying the version tag
ENVELOPE_VERSION_FIELD = "version"

# Fallback when no host application version can be discovered
FALLBACK_APP_VERSION = "0.0.0"

# Distribution name of this package (used for version discovery)
PACKAGE_DISTRIBUTION = "vapic"

# Request state attribute names (request.state.<name>)
STATE_CACHE_KEY = "vapic_cache_key"
STATE_VERSION = "vapic_version"
STATE_RESULT = "vapic_result"
STATE_ERROR = "vapic_error"
