import os
import sys
import logging

# Ensure this directory is in the path for uvicorn and other runners
current_dir = os.path.dirname(os.path.abspath(__file__))
if current_dir not in sys.path:
    sys.path.append(current_dir)

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import config
from database import init_db
from errors import HabitFlowError
from routes.auth_routes import router as auth_router
from routes.habit_routes import router as habit_router
from routes.dashboard_routes import router as dashboard_router

logging.basicConfig(level=config.LOG_LEVEL)
logger = logging.getLogger(__name__)

# The local SQL backend owns its schema; Supabase tables are managed in the dashboard
if config.DATA_BACKEND == "sql":
    init_db()

app = FastAPI(title=f"{config.APP_NAME} API")


@app.exception_handler(HabitFlowError)
async def habitflow_error_handler(request: Request, exc: HabitFlowError):
    logger.warning(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.get("/api/v1/health-check")
async def health():
    return {"status": "ok", "backend": config.DATA_BACKEND}


app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router)
app.include_router(habit_router)
app.include_router(dashboard_router)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
