# backend/main.py
import logging
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

load_dotenv()

from config import settings
from database import init_db
from utils.errors import AppError

# Router imports
from routes.items import router as items_router
from routes.whitelist import router as whitelist_router
from routes.positions import router as positions_router
from routes.contents import router as contents_router
from routes.stock_history import router as stock_history_router
from routes.categories import router as categories_router
from routes.locations import router as locations_router
from routes.authors import router as authors_router
from routes.position_schemas import router as position_schemas_router
from routes.uploads import router as uploads_router
from routes.account import router as account_router
from routes.dashboard import router as dashboard_router
from routes.qrcode import router as qrcode_router
from routes.preview import router as preview_router

API_PREFIX = "/api/v1"

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Initialisation
init_db()

app = FastAPI(title="Storage Inventory API", version="1.0.0")

# Uploads - make sure the directory exists before mounting it
Path(settings.UPLOAD_DIR).mkdir(parents=True, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=settings.UPLOAD_DIR), name="uploads")

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---- ERROR HANDLERS ----
@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    details = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")),
            "message": err.get("msg", "Invalid value"),
        }
        for err in exc.errors()
    ]
    return JSONResponse(status_code=400, content={"error": "Validation failed", "details": details})


# Generic failure: the operation may have left partial state and should be retried
@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error("Database error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


# Router registration
app.include_router(items_router, prefix=API_PREFIX)
app.include_router(whitelist_router, prefix=API_PREFIX)
app.include_router(positions_router, prefix=API_PREFIX)
app.include_router(contents_router, prefix=API_PREFIX)
app.include_router(stock_history_router, prefix=API_PREFIX)
app.include_router(categories_router, prefix=API_PREFIX)
app.include_router(locations_router, prefix=API_PREFIX)
app.include_router(authors_router, prefix=API_PREFIX)
app.include_router(position_schemas_router, prefix=API_PREFIX)
app.include_router(uploads_router, prefix=API_PREFIX)
app.include_router(account_router, prefix=API_PREFIX)
app.include_router(dashboard_router, prefix=API_PREFIX)
app.include_router(qrcode_router, prefix=API_PREFIX)
app.include_router(preview_router, prefix=API_PREFIX)


@app.get("/")
def read_root():
    return {"message": "Storage Inventory API is running"}
