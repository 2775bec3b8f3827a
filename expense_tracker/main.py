import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from expense_tracker.core.config import FRONTEND_URL, LOG_LEVEL
from expense_tracker.core.exceptions import (
    AuthenticationError,
    ConfigurationError,
    ConflictError,
    ExpenseTrackerError,
    FirestoreError,
    NotFoundError,
    ValidationError,
)
from expense_tracker.routers import auth, expenses

# --- CONFIG ---
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title="Expense Tracker API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=[FRONTEND_URL],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router)
app.include_router(expenses.router)

# --- ERRORS ---
STATUS_BY_ERROR = [
    (ValidationError, 422),
    (NotFoundError, 404),
    (ConfigurationError, 409),
    (ConflictError, 409),
    (AuthenticationError, 401),
    (FirestoreError, 503),
]


@app.exception_handler(ExpenseTrackerError)
async def handle_service_error(request: Request, exc: ExpenseTrackerError):
    status_code = 500
    for error_type, code in STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            status_code = code
            break

    headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    return JSONResponse(status_code=status_code, content={"detail": str(exc)}, headers=headers)


# --- ROUTES ---
@app.get("/")
def home():
    return {"status": "Expense Tracker API Online"}


@app.get("/api/health")
def health():
    """Health check endpoint"""
    return {"status": "ok", "service": "Expense Tracker API"}
