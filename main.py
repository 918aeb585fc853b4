import logging
from contextlib import asynccontextmanager
from functools import partial

from fastapi import FastAPI

from app.application.use_cases.notifications import register_record_triggers
from app.config import get_settings
from app.infrastructure.database import engine, initialize_database
from app.infrastructure.events import RecordEventBus
from app.infrastructure.push import build_push_transport
from app.interfaces.api.dependencies import open_fan_out
from app.interfaces.api.routes import register_routes


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Prepare the database and push transport on startup and release them on shutdown."""

    initialize_database()
    app.state.push_transport = build_push_transport(get_settings())
    app.state.record_events = RecordEventBus()
    register_record_triggers(app.state.record_events, partial(open_fan_out, app))
    yield
    engine.dispose()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    settings = get_settings()
    logging.getLogger("app").setLevel(settings.log_level.upper())

    app = FastAPI(title="Push Fan-Out API", lifespan=lifespan)
    register_routes(app)
    return app


app = create_app()
