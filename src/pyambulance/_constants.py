"""Internal constants shared across the library."""

CHANNEL_URL = "wss://esp32-dashboard-1.onrender.com"
USER_AGENT = "pyambulance/1 (+https://github.com/pyambulance/pyambulance)"

# Fallback map centre used until the first GPS fix arrives.
FALLBACK_LATITUDE = 17.3297
FALLBACK_LONGITUDE = 76.8343

# ------------------------------------------------------------------
# Vital-sign alert thresholds (exclusive lower bounds)
# ------------------------------------------------------------------

SPO2_MIN = 90.0
HEART_RATE_MIN = 80.0
TEMPERATURE_MIN = 20.0

# ------------------------------------------------------------------
# Outbound command frames
# ------------------------------------------------------------------

HOSPITAL_SELECT_TYPE = "hospitalSelect"

# ------------------------------------------------------------------
# Facility search (OpenStreetMap Nominatim)
# ------------------------------------------------------------------

SEARCH_URL = "https://nominatim.openstreetmap.org/search"
SEARCH_QUERY = "hospital"
SEARCH_LIMIT = 10
SEARCH_RADIUS_DEG = 0.05
