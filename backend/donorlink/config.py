import os

from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./donorlink.db")

if DATABASE_URL.startswith("postgres://"):
    DATABASE_URL = DATABASE_URL.replace("postgres://", "postgresql://", 1)

SECRET_KEY = os.getenv("SECRET_KEY", "donorlink-dev-secret-change-me")
ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24)))

# Geolocation and geocoding
GEOLOCATION_TIMEOUT_SECONDS = float(os.getenv("GEOLOCATION_TIMEOUT_SECONDS", "5"))
GEOCODER_TIMEOUT_SECONDS = float(os.getenv("GEOCODER_TIMEOUT_SECONDS", "5"))
NOMINATIM_USER_AGENT = os.getenv("NOMINATIM_USER_AGENT", "donorlink-backend")

# Profile rows are written by a signup trigger and can lag behind the token
PROFILE_FETCH_ATTEMPTS = int(os.getenv("PROFILE_FETCH_ATTEMPTS", "3"))
PROFILE_FETCH_BACKOFF_SECONDS = float(os.getenv("PROFILE_FETCH_BACKOFF_SECONDS", "0.2"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
