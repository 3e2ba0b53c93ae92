import os
import warnings
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./septic_service.db")

# Security
SECRET_KEY = os.getenv("SECRET_KEY")
if not SECRET_KEY:
    warnings.warn(
        "SECRET_KEY not set! Using insecure default - DO NOT USE IN PRODUCTION", RuntimeWarning, stacklevel=2
    )
    SECRET_KEY = "INSECURE-DEV-KEY-CHANGE-IN-PRODUCTION"  # noqa: S105 - Dev fallback only

JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_HOURS = int(os.getenv("ACCESS_TOKEN_EXPIRE_HOURS", "24"))
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "12"))

# CORS
ALLOWED_ORIGINS = os.getenv(
    "ALLOWED_ORIGINS",
    "http://localhost:5173,http://localhost:3000",
).split(",")

# Demo accounts created on an empty users table
SEED_DEMO_USERS = os.getenv("SEED_DEMO_USERS", "true").lower() == "true"
ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@test.com")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "admin123")
EMPLOYEE_EMAIL = os.getenv("EMPLOYEE_EMAIL", "employee@test.com")
EMPLOYEE_PASSWORD = os.getenv("EMPLOYEE_PASSWORD", "employee123")
GUEST_EMAIL = os.getenv("GUEST_EMAIL", "guest@test.com")
GUEST_PASSWORD = os.getenv("GUEST_PASSWORD", "guest123")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
