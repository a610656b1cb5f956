import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from routes.schedule import router as schedule_router
from routes.schedule_state import ScheduleBoard
from services.schedule_table import ScheduleTable, build_table
from settings import APP_TIMEZONE, LOG_LEVEL, WEB_ORIGIN

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(table: Optional[ScheduleTable] = None) -> FastAPI:
    """
    Builds the app. The board is created at startup and loads the schedule list once.

    :param table: table client; chosen from settings when omitted
    :type table: Optional[ScheduleTable]
    :return: FastAPI app
    :rtype: FastAPI
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        board = ScheduleBoard(table or build_table(), APP_TIMEZONE)
        board.load()
        app.state.board = board
        logger.info("Board ready with %d schedules", len(board.schedules))
        yield

    app = FastAPI(title="Ratiba", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o for o in ("http://localhost:8000", WEB_ORIGIN) if o],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(schedule_router)

    @app.get("/health")
    def health():
        return {"ok": True}

    return app


app = create_app()
