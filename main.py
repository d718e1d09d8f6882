import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from salon_admin.core.config import settings
from salon_admin.api.api_v1.api import router as api_router
from salon_admin.db.backend import connect_to_backend, close_backend_connection

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title=settings.APP_NAME,
    version="1.0.0",
    description="Nail salon scheduling and staff console API"
)

# Set up CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(api_router, prefix="/api/v1")

# Backend connection events
@app.on_event("startup")
async def startup_backend_client():
    await connect_to_backend()

@app.on_event("shutdown")
async def shutdown_backend_client():
    await close_backend_connection()

@app.get("/")
async def root():
    return {"message": f"Welcome to {settings.APP_NAME}"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
