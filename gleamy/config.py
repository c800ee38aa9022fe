import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

ENVIRONMENT = os.getenv("ENVIRONMENT", "development")

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./gleamy.db")

# Firebase Configuration
FIREBASE_PROJECT_ID = os.getenv("FIREBASE_PROJECT_ID")
# Path to a service account JSON file; falls back to Application Default Credentials
FIREBASE_SERVICE_ACCOUNT_PATH = os.getenv("FIREBASE_SERVICE_ACCOUNT_PATH")

# CORS - comma separated list of origins
ALLOWED_ORIGINS = [
    origin.strip()
    for origin in os.getenv("ALLOWED_ORIGINS", "http://localhost:5173").split(",")
    if origin.strip()
]

# Booking numbers look like GLM-20260118-K3J9QW2Z
BOOKING_NUMBER_PREFIX = os.getenv("BOOKING_NUMBER_PREFIX", "GLM")
BOOKING_NUMBER_MAX_ATTEMPTS = int(os.getenv("BOOKING_NUMBER_MAX_ATTEMPTS", "5"))

# How many active jobs an employee may hold before being marked unavailable
EMPLOYEE_MAX_ACTIVE_JOBS = int(os.getenv("EMPLOYEE_MAX_ACTIVE_JOBS", "1"))

# Pagination for admin listings
DEFAULT_PAGE_SIZE = int(os.getenv("DEFAULT_PAGE_SIZE", "10"))
MAX_PAGE_SIZE = int(os.getenv("MAX_PAGE_SIZE", "100"))
