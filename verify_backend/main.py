import uvicorn

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse

from verify_backend.config import get_logger, settings
from verify_backend.router import fairness_router, games_router

# Initialize logger
logger = get_logger("main")

SERVICE_TITLE = settings.app_name
SERVICE_PATH = "verify"
API_VERSION = "v1"

# Main application instance
app = FastAPI(title=f"{SERVICE_TITLE} - Main Gateway")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/", response_class=HTMLResponse)
@app.get(f"/{SERVICE_PATH}", response_class=HTMLResponse)
@app.get(f"/{SERVICE_PATH}/", response_class=HTMLResponse)
async def hello_service():
    logger.info(f"Root or service path /{SERVICE_PATH} accessed.")
    return f"""
    <html>
        <head>
            <title>{SERVICE_TITLE}</title>
        </head>
        <body>
            <h1>You've reached the {SERVICE_TITLE}.</h1>
            <p>See <a href='/{SERVICE_PATH}/api/{API_VERSION}/docs'>API docs</a> for round verification.</p>
        </body>
    </html>
    """


@app.get("/health")
async def health_check():
    return {"status": "healthy"}


# Sub-API for verification operations, to be mounted
api_v1 = FastAPI(
    title=SERVICE_TITLE,
    description="Recompute game round outcomes from revealed seeds and check seed commitments.",
    version=API_VERSION,
)

api_v1.include_router(fairness_router.router)
api_v1.include_router(games_router.router)
logger.info("Fairness and game verification routers included in the sub-API.")

app.mount(f"/{SERVICE_PATH}/api/{API_VERSION}", api_v1)
logger.info(f"Sub-API mounted at /{SERVICE_PATH}/api/{API_VERSION}")


if __name__ == "__main__":
    port = 8080
    host = "0.0.0.0"

    logger.info(f"Starting Uvicorn server on {host}:{port}")
    uvicorn.run("verify_backend.main:app", host=host, port=port, log_level="info")
