import argparse
import logging
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager

import sys
from pathlib import Path

# Add project root to path for package imports
base_dir = Path(__file__).parent
sys.path.insert(0, str(base_dir))

from db.database import init_db
from config import load_config
from errors import CoachError
from routes import vocab, drills, plan  # Import routers

logger = logging.getLogger("actcoach")

# First-run init
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: init DB and config
    config = load_config()  # Ensures config exists
    logging.getLogger().setLevel(config["logging"]["level"])
    init_db()
    yield

app = FastAPI(
    title="ACT Coach",
    description="Spaced-repetition vocabulary scheduling and drill caching",
    lifespan=lifespan,
)

# Include routers
app.include_router(vocab.router, prefix="/vocab", tags=["vocab"])
app.include_router(drills.router, prefix="/drills", tags=["drills"])
app.include_router(plan.router, prefix="/plan", tags=["plan"])

@app.exception_handler(CoachError)
async def coach_error_handler(request: Request, exc: CoachError):
    logger.warning("%s on %s: %s", exc.__class__.__name__, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

@app.get("/")
async def home():
    return {"status": "ok", "app": "actcoach"}

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="ACT Coach API")
    parser.add_argument("--init", action="store_true", help="Initialize DB and config")
    parser.add_argument("--dev", action="store_true", help="Run in dev mode with reload")
    parser.add_argument("--port", type=int, default=8000, help="Port to listen on")
    args = parser.parse_args()
    config = load_config()  # Ensures config is copied if missing
    logging.basicConfig(
        level=config["logging"]["level"],
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if args.init:
        init_db()
        logger.info("DB initialized and config copied to ~/.actcoach/")
        sys.exit(0)
    # Run server
    uvicorn.run("main:app", host="127.0.0.1", port=args.port, reload=args.dev,
                log_level=config["logging"]["level"].lower())
