# main.py

import os
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# ================================================================
# LOGGING (BOOT FIRST)
# ================================================================
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(message)s",
)
logger = logging.getLogger("brickwyze-backend")
logger.info("Brickwyze backend boot sequence started")

# ================================================================
# ROUTERS (GUARDED IMPORTS, DO NOT BLOCK SERVER START)
# ================================================================
weights_router = None
ethnicities_router = None
filters_router = None
resilience_router = None
assistant_router = None
supabase_health_router = None

try:
    from routers.weights import router as weights_router  # type: ignore
    logger.info("Weights router loaded")
except Exception as e:
    logger.error(f"Failed to load weights router (startup continues): {e}")

try:
    from routers.ethnicities import router as ethnicities_router  # type: ignore
    logger.info("Ethnicity router loaded")
except Exception as e:
    logger.error(f"Failed to load ethnicity router (startup continues): {e}")

try:
    from routers.filters import router as filters_router  # type: ignore
    logger.info("Filters router loaded")
except Exception as e:
    logger.error(f"Failed to load filters router (startup continues): {e}")

try:
    from routers.resilience import router as resilience_router  # type: ignore
    logger.info("Resilience router loaded")
except Exception as e:
    logger.error(f"Failed to load resilience router (startup continues): {e}")

try:
    from routers.assistant import router as assistant_router  # type: ignore
    logger.info("Assistant router loaded")
except Exception as e:
    logger.error(f"Failed to load assistant router (startup continues): {e}")

try:
    from routers.supabase_health import router as supabase_health_router  # type: ignore
except Exception as e:
    logger.error(f"Failed to load Supabase diagnostics router (startup continues): {e}")

# ================================================================
# FASTAPI APP
# ================================================================
logger.info("Creating FastAPI app")

app = FastAPI(
    title="Brickwyze Backend",
    description="Brickwyze location scoring • Weights • Ethnicity filters • Resilience scores • Bricky",
    version="1.0.0",
)

# ================================================================
# CORS
# ================================================================
_origins = [o.strip() for o in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",") if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=_origins or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ================================================================
# ROOT / HEALTH
# ================================================================
@app.get("/")
def root():
    return {
        "message": "Brickwyze Engine Online",
        "weights_router_loaded": bool(weights_router),
        "ethnicity_router_loaded": bool(ethnicities_router),
        "filters_router_loaded": bool(filters_router),
        "resilience_router_loaded": bool(resilience_router),
        "assistant_router_loaded": bool(assistant_router),
    }


@app.get("/healthz", include_in_schema=False)
def health_probe():
    return {"status": "healthy"}


# ================================================================
# ROUTERS
# ================================================================
for _router in (
    weights_router,
    ethnicities_router,
    filters_router,
    resilience_router,
    assistant_router,
    supabase_health_router,
):
    if _router:
        app.include_router(_router)


# ================================================================
# LIFECYCLE
# ================================================================
@app.on_event("startup")
def startup_event():
    logger.info("Brickwyze Backend started.")


@app.on_event("shutdown")
def shutdown_event():
    logger.info("Brickwyze Backend stopped.")
