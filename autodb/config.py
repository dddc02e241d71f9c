import logging
import os
import sys

from dotenv import load_dotenv

load_dotenv()

# Gemini setup (GENERATIVE_API_KEY is the older name for the same key)
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY") or os.getenv("GENERATIVE_API_KEY")
MODEL_ID = os.getenv("GEMINI_MODEL", "gemini-2.0-flash")

# HTTP server
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "5000"))
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv(
        "CORS_ORIGINS",
        "http://localhost:5173,http://localhost:3000",
    ).split(",")
    if origin.strip()
]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

EXAMPLE_PROMPTS = [
    "Uber-like app with Riders, Drivers, Trips, and Payments",
    "Online School with Students, Courses, Instructors, and Enrollments",
    "A hospital contains Doctors, Patients, Appointments, Departments, Nurses, "
    "Prescriptions. Each patient may have multiple Appointments. Doctors work in Departments",
]


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Send log records to stdout with a timestamped format"""
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )
    # uvicorn's access log duplicates our request logging
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
