"""Application constants - centralized configuration values."""

# =============================================================================
# GitHub OAuth
# =============================================================================
GITHUB_AUTHORIZE_URL = "https://github.com/login/oauth/authorize"
GITHUB_TOKEN_URL = "https://github.com/login/oauth/access_token"
GITHUB_USER_URL = "https://api.github.com/user"
GITHUB_USER_AGENT = "ghlogin"
GITHUB_DEFAULT_SCOPES = ["read:user"]

# =============================================================================
# Cookies
# =============================================================================
OAUTH_STATE_COOKIE_NAME = "github_oauth_state"
OAUTH_STATE_MAX_AGE = 60 * 10  # 10 minutes
SESSION_COOKIE_NAME = "auth_session"

# =============================================================================
# Session & Security
# =============================================================================
SESSION_EXPIRES_DAYS = 30
SESSION_ID_ENTROPY_BYTES = 25  # 40 base32 characters
USER_ID_ENTROPY_BYTES = 10  # 16 base32 characters
OAUTH_STATE_ENTROPY_BYTES = 32

# =============================================================================
# API Timeouts (in seconds)
# =============================================================================
HTTPX_TIMEOUT = 10.0
