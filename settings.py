from config.loader import get_config_loader

config = get_config_loader()

# Hospital records API
API_BASE_URL = config.get("API_BASE_URL", "https://hospital-backend-app.vercel.app")
REFRESH_PATH = "/api/auth/token/refresh/"

# Where the UI lands after an irrecoverable authentication failure
LOGIN_PATH = "/auth/login"

# Timeout configuration
# Connection timeout: Time to establish TCP connection
CONNECT_TIMEOUT = config.get("CONNECT_TIMEOUT", 10.0)
# Request timeout: Total timeout for a single API call
REQUEST_TIMEOUT = config.get("REQUEST_TIMEOUT", 30.0)

# Concurrent 401 handling:
# False - every rejected request runs its own refresh call
# True  - concurrent rejections share one in-flight refresh
REFRESH_SINGLE_FLIGHT = config.get("REFRESH_SINGLE_FLIGHT", False)

# Session storage (access_token / refresh_token / user slots)
SESSION_FILE = config.get("SESSION_FILE", "~/.hospital-admin/session.json")

# Logging
LOG_LEVEL = config.get("LOG_LEVEL", "warning")
DEBUG_LOG_FILE = config.get("DEBUG_LOG_FILE", "hospital_admin_debug.log")
