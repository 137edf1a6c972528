import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request, Depends
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.orm import Session

from spendwise.core.config import settings
from spendwise.core.errors import error_response, install_error_handlers
from spendwise.core.rate_limit import FixedWindowRateLimiter
from spendwise.db.session import get_db, engine, Base
from spendwise.routers import (
    accounts,
    analytics,
    budgets,
    categories,
    debts,
    gamification,
    goals,
    networth,
    summary,
    transactions,
    users,
)
import spendwise.models  # noqa: F401  (registers every table)

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger("spendwise")

# Create tables on boot; schema changes go through alembic
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.PROJECT_VERSION
)

rate_limiter = FixedWindowRateLimiter(
    max_requests=settings.RATE_LIMIT_MAX_REQUESTS,
    window=settings.RATE_LIMIT_WINDOW_SECONDS,
    max_clients=settings.RATE_LIMIT_MAX_CLIENTS,
)


@app.middleware("http")
async def limit_requests(request: Request, call_next):
    if request.url.path.startswith(settings.API_PREFIX + "/"):
        client = request.client.host if request.client else "unknown"
        allowed, remaining, reset_in = rate_limiter.hit(client)
        headers = {
            "RateLimit-Limit": str(rate_limiter.max_requests),
            "RateLimit-Remaining": str(remaining),
            "RateLimit-Reset": str(reset_in),
        }
        if not allowed:
            logger.warning("Rate limit exceeded for %s", client)
            return error_response(429, "Too many requests, please try again later", headers=headers)
        response = await call_next(request)
        response.headers.update(headers)
        return response
    return await call_next(request)


@app.middleware("http")
async def limit_body_size(request: Request, call_next):
    length = request.headers.get("content-length")
    if length and length.isdigit():
        if int(length) > settings.MAX_BODY_BYTES:
            return error_response(413, "Request body too large")
    elif request.method in ("POST", "PUT", "PATCH"):
        # Chunked bodies carry no length up front, so measure them
        body = await request.body()
        if len(body) > settings.MAX_BODY_BYTES:
            return error_response(413, "Request body too large")
    return await call_next(request)


# Added last so it wraps everything, including the early rejections above
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_origin_regex=settings.ALLOWED_ORIGIN_REGEX,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

install_error_handlers(app)

# Include our backend logic
api = settings.API_PREFIX
app.include_router(users.router, prefix=f"{api}/users", tags=["users"])
app.include_router(accounts.router, prefix=f"{api}/accounts", tags=["accounts"])
app.include_router(categories.router, prefix=f"{api}/categories", tags=["categories"])
app.include_router(transactions.router, prefix=f"{api}/transactions", tags=["transactions"])
app.include_router(budgets.router, prefix=f"{api}/budgets", tags=["budgets"])
app.include_router(goals.router, prefix=f"{api}/goals", tags=["goals"])
app.include_router(debts.router, prefix=f"{api}/debts", tags=["debts"])
app.include_router(networth.router, prefix=f"{api}/networth", tags=["networth"])
app.include_router(analytics.router, prefix=f"{api}/analytics", tags=["analytics"])
app.include_router(gamification.router, prefix=f"{api}/gamification", tags=["gamification"])
app.include_router(summary.router, prefix=f"{api}/summary", tags=["summary"])


@app.get("/health")
def health_check(db: Session = Depends(get_db)):
    try:
        db.execute(text("SELECT 1"))
        database = "connected"
    except Exception as e:
        logger.error("Health check could not reach the database: %s", e)
        database = f"disconnected: {str(e)}"
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": settings.PROJECT_VERSION,
        "database": database,
    }


logger.info(
    "%s %s ready on port %s (env=%s), areas: %s",
    settings.PROJECT_NAME,
    settings.PROJECT_VERSION,
    settings.PORT,
    settings.APP_ENV,
    ", ".join(sorted({r.path.split("/")[2] for r in app.routes if r.path.startswith(api + "/")})),
)
