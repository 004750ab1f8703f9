"""
Application-level constants for hardcoded business logic.

These values define core catalog behavior and should NEVER be changed
via environment variables or configuration.

For configurable values (connection pools, timeouts, page size default),
see quotes_api/settings.py where values can be overridden via environment
variables.
"""

# ============================================================================
# Pagination Safety Limits
# ============================================================================

# Maximum allowed page size; larger requests are clamped down, not rejected
# For default page size, see quotes_api/settings.py (DEFAULT_PAGE_SIZE)
MAX_PAGE_SIZE = 100

DEFAULT_OFFSET = 0

# Largest offset PostgreSQL accepts (bigint); larger values fall back to
# DEFAULT_OFFSET
MAX_OFFSET = 2**63 - 1


# ============================================================================
# Field Limits
# ============================================================================

AUTHOR_NAME_MAX_LENGTH = 255
QUOTE_SOURCE_MAX_LENGTH = 500

# Primary keys are int4 serial columns; IDs outside 1..MAX_ENTITY_ID cannot
# exist and are reported as not found without querying
MAX_ENTITY_ID = 2**31 - 1


# ============================================================================
# Health Checks
# ============================================================================

# Timeout (seconds) for the database ping performed by /readyz
READINESS_PING_TIMEOUT_SECONDS = 2
