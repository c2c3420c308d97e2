# app/main.py
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.config import settings
from app.database import Base, engine
from app.api import mentor, notification, review

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

# Create database tables (migrations are managed by alembic outside development)
if settings.APP_ENV == "development":
    Base.metadata.create_all(bind=engine)

# Initialize FastAPI app
app = FastAPI(title="CareerNav Review Sharing API", debug=settings.DEBUG)

# CORS Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routers
app.include_router(review.router)        # /students/*
app.include_router(mentor.router)        # /mentors/*
app.include_router(notification.router)  # /users/{user_id}/notifications/*


@app.get("/health")
def health_check():
    return {
        "status": "healthy",
        "message": "CareerNav review sharing API is running",
        "version": "0.1.0",
    }
