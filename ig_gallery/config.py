"""
Gallery Configuration and Constants
"""

# ============================================================
# Graph API
# ============================================================
GRAPH_API_VERSION = "v19.0"
GRAPH_BASE = f"https://graph.facebook.com/{GRAPH_API_VERSION}"

# oEmbed lookup: permalink -> media_id
OEMBED_URL = f"{GRAPH_BASE}/instagram_oembed"

# Media fetch: media_id -> display metadata
MEDIA_URL = GRAPH_BASE + "/{media_id}"
MEDIA_FIELDS = (
    "media_type",
    "media_url",
    "thumbnail_url",
    "permalink",
    "caption",
    "timestamp",
)

# oEmbed app token is "<app_id>|<client_token>"
APP_TOKEN_SEPARATOR = "|"

# ============================================================
# Environment variables (credentials)
# ============================================================
ENV_APP_ID = "IG_APP_ID"
ENV_CLIENT_TOKEN = "IG_CLIENT_TOKEN"
ENV_ACCESS_TOKEN = "IG_ACCESS_TOKEN"

# ============================================================
# HTTP (curl_cffi)
# ============================================================
BROWSER_IMPERSONATION = "chrome"
REQUEST_TIMEOUT = 15

# ============================================================
# Sample media (no network)
# ============================================================
SAMPLE_POSTER_URL = (
    "https://images.unsplash.com/photo-1549880338-65ddcdfd017b"
    "?q=80&w=1080&auto=format&fit=crop"
)
SAMPLE_VIDEO_URL = "https://samplelib.com/lib/preview/mp4/sample-5s.mp4"

DEFAULT_TABLE = (
    "Name\tResults\tCPR\tVideo Link\n"
    "American Psycho\t2\t0.2\thttps://www.instagram.com/p/DMBhlKcJHK4/#advertiser\n"
    "Jake WOrk\t30\t0.12\thttps://www.instagram.com/p/DMBhlgJMmCN/#advertiser"
)

# ============================================================
# Service
# ============================================================
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8877
