"""Constants for the conduit client."""

# Delay before a still-loading resource is reported as slow (seconds)
SLOW_LOAD_THRESHOLD = 0.5

# Network timeouts (seconds)
REQUEST_TIMEOUT = 30.0

DEFAULT_API_URL = "https://api.realworld.io/api"

MIN_PASSWORD_LENGTH = 8

# Page sizes used by the article list endpoints
HOME_ARTICLES_PER_PAGE = 10
PROFILE_ARTICLES_PER_PAGE = 5
