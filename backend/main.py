from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.staticfiles import StaticFiles
from fastapi.encoders import jsonable_encoder
from mychat.routes import chat, contacts, profile
from mychat.core.config import settings
from mychat.core.errors import AppError, ValidationError
from mychat.db.init_db import create_missing_tables
from mychat.utils.logger import setup_logging, get_logger
from dotenv import load_dotenv
from pathlib import Path
import json

load_dotenv()
setup_logging()
logger = get_logger("mychat.api")

# Custom JSON encoder that preserves Unicode characters (emojis)
class UnicodeJSONResponse(JSONResponse):
    def render(self, content) -> bytes:
        return json.dumps(
            content,
            ensure_ascii=False,
            allow_nan=False,
            indent=None,
            separators=(",", ":"),
        ).encode("utf-8")

# Create uploads directory if it doesn't exist (StaticFiles needs it at mount time)
UPLOADS_DIR = Path(settings.UPLOADS_DIR)
UPLOADS_DIR.mkdir(parents=True, exist_ok=True)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting application...")
    create_missing_tables()
    yield
    logger.info("Shutting down...")


app = FastAPI(
    title="MyChat API",
    description="Chat, contacts and profiles API",
    version="1.0.0",
    openapi_tags=[
        {"name": "Chat", "description": "Mock chat bot endpoints"},
        {"name": "Contacts", "description": "Contact request and relationship endpoints"},
        {"name": "Profile", "description": "User profile endpoints"},
    ],
    default_response_class=UnicodeJSONResponse,
    lifespan=lifespan,
)

app.mount("/uploads", StaticFiles(directory=str(UPLOADS_DIR)), name="uploads")

# Add request logging middleware
@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all incoming API requests"""
    method = request.method
    path = request.url.path
    client = request.client.host if request.client else "Unknown"

    response = await call_next(request)

    logger.info("[%s] %s - Status: %s (client: %s)", method, path, response.status_code, client)
    return response

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    """Render service errors as {"detail": message}"""
    content = {"detail": exc.message}
    if isinstance(exc, ValidationError):
        content["errors"] = exc.errors
    if exc.status_code >= 500:
        logger.error("App error on %s: %s", request.url.path, exc.message)
    else:
        logger.debug("App error on %s: %s (%s)", request.url.path, exc.message, exc.status_code)

    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == status.HTTP_401_UNAUTHORIZED else None
    return UnicodeJSONResponse(status_code=exc.status_code, content=content, headers=headers)

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies are client errors (400)"""
    return UnicodeJSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle all other exceptions"""
    logger.exception("Unhandled exception on %s", request.url.path)
    return UnicodeJSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": f"Internal server error: {str(exc)}"},
    )


# Include routers
app.include_router(chat.router, prefix="/api/chat", tags=["Chat"])
app.include_router(contacts.router, prefix="/api/contacts", tags=["Contacts"])
app.include_router(profile.router, prefix="/api/profile", tags=["Profile"])

@app.get("/")
async def root():
    return {"message": "Welcome to the MyChat API"}

@app.get("/api/health")
async def health_check():
    return {"status": "healthy"}

# Run uvicorn server when file is executed directly
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=True
    )
