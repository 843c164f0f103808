import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, APIRouter
from fastapi.middleware.cors import CORSMiddleware

from config.settings import DATABASE_URL, CORS_ORIGINS, LOG_LEVEL, HOST, PORT
from config.database import Base, build_engine, build_session_factory

from app.api.error_handlers import register_error_handlers
from app.routes.child_routes import router as child_routes
from app.routes.sleep_record_routes import router as sleep_record_routes
from app.routes.prediction_routes import router as prediction_routes
from app.utils.sleep_predictor import SleepPredictor

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # O banco vive enquanto o processo estiver no ar
    engine = build_engine(DATABASE_URL)
    Base.metadata.create_all(bind=engine)
    app.state.session_factory = build_session_factory(engine)
    app.state.predictor = SleepPredictor()
    logger.info("Armazenamento iniciado em %s", DATABASE_URL)
    try:
        yield
    finally:
        engine.dispose()
        logger.info("Armazenamento encerrado")


# Cria a instância do FastAPI
app = FastAPI(
    title="Baby Sleep Tracker API",
    version="0.1.0",
    description="Backend para acompanhar e prever o sono de bebês",
    lifespan=lifespan,
)

# Configura CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Cria o roteador principal com prefixo /api
routerAPI = APIRouter(prefix="/api")

routerAPI.include_router(child_routes)
routerAPI.include_router(sleep_record_routes)
routerAPI.include_router(prediction_routes)
# Anexa o roteador à aplicação principal
app.include_router(routerAPI)


@app.get("/", tags=["Root"])
async def read_root():
    return {"status": "Baby Sleep Tracker API está no ar!"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=HOST, port=PORT, log_level=LOG_LEVEL.lower())
