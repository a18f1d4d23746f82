import os
from dotenv import load_dotenv

# Load the .env file
load_dotenv()

# -------------------- Auth -------------------- #
JWT_SECRET = os.getenv("JWT_SECRET", "supersecretkey")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_EXPIRATION_MINUTES = int(os.getenv("JWT_EXPIRATION_MINUTES", 60 * 24))  # 1 day

# -------------------- Reports -------------------- #
DEFAULT_RADIUS_KM = float(os.getenv("DEFAULT_RADIUS_KM", 10))
SEED_SAMPLE_COUNT = int(os.getenv("SEED_SAMPLE_COUNT", 150))
SEED_RANDOM_SEED = int(os.getenv("SEED_RANDOM_SEED")) if os.getenv("SEED_RANDOM_SEED") else None

# -------------------- Geocoding -------------------- #
GOOGLE_MAPS_KEY = os.getenv("GOOGLE_MAPS_KEY")
GOOGLE_GEOCODE_URL = os.getenv("GOOGLE_GEOCODE_URL", "https://maps.googleapis.com/maps/api/geocode/json")
NOMINATIM_URL = os.getenv("NOMINATIM_URL", "https://nominatim.openstreetmap.org/reverse")
GEOCODE_USER_AGENT = os.getenv("GEOCODE_USER_AGENT", "civicpulse-backend/1.0 (contact@example.com)")
GEOCODE_TIMEOUT = float(os.getenv("GEOCODE_TIMEOUT", 5))
GEOCODE_CACHE_TTL = int(os.getenv("GEOCODE_CACHE_TTL", 60 * 60))

# -------------------- Uploads -------------------- #
UPLOAD_DIR = os.getenv("UPLOAD_DIR", os.path.join(os.path.dirname(os.path.abspath(__file__)), "uploads"))
MAX_UPLOAD_FILES = 2
MAX_FILE_SIZE = 5 * 1024 * 1024

# -------------------- Server -------------------- #
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
PORT = int(os.getenv("PORT", 4000))
