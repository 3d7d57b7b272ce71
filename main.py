import logging
import os

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError
from pydantic import ValidationError
from ideaboard.db.database import engine, Base
from ideaboard.api.v1.endpoints import users, auth, ideas, votes, comments

from ideaboard.core.exception import (
    IdeaBoardError,
    validation_exception_handler,
    http_exception_handler,
    idea_board_exception_handler,
    database_exception_handler,
    general_exception_handler
)
from ideaboard.core.constants import APIConfig, LoggingConfig

# Import models to register them with SQLAlchemy
from ideaboard.models import user, ideas as idea_models

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", LoggingConfig.DEFAULT_LOG_LEVEL),
    format=LoggingConfig.LOG_FORMAT,
    datefmt=LoggingConfig.DATE_FORMAT
)
logging.getLogger("sqlalchemy.engine").setLevel(LoggingConfig.DATABASE_LOG_LEVEL)

# Create all tables in the database
Base.metadata.create_all(bind=engine)


def create_app() -> FastAPI:
    app = FastAPI(
        title=APIConfig.API_TITLE,
        description=APIConfig.API_DESCRIPTION,
        version=APIConfig.API_VERSION
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=APIConfig.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=APIConfig.ALLOWED_METHODS,
        allow_headers=["*"],
    )

    # Register exception handlers
    app.add_exception_handler(ValidationError, validation_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(IdeaBoardError, idea_board_exception_handler)
    app.add_exception_handler(SQLAlchemyError, database_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    # Include routers with centralized prefix
    app.include_router(users.router, prefix=APIConfig.API_V1_PREFIX)
    app.include_router(auth.router, prefix=APIConfig.API_V1_PREFIX)
    app.include_router(ideas.router, prefix=APIConfig.API_V1_PREFIX)
    app.include_router(votes.router, prefix=APIConfig.API_V1_PREFIX)
    app.include_router(comments.router, prefix=APIConfig.API_V1_PREFIX)

    @app.get("/")
    def read_root():
        return {"message": "Welcome to the Idea Board API!"}

    return app


app = create_app()
