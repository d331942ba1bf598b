import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from nottoday.api.routes import router
from nottoday.core.circle import generate_circle_lines
from nottoday.core.runtime import build_controller
from nottoday.observability.logging import log
from nottoday.settings import settings
from nottoday.utils.timers import AsyncioScheduler


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Timers must live on the loop that serves requests
    controller = build_controller(AsyncioScheduler(asyncio.get_running_loop()))
    app.state.controller = controller
    app.state.vibrator = controller.vibrator
    app.state.circle_lines = generate_circle_lines()
    log(
        event="boot",
        storeBackend=settings.STORE_BACKEND,
        depth=controller.depth,
        pullCount=controller.depth_state.pullCount,
        haptics=controller.vibrator is not None,
    )
    yield


app = FastAPI(title="not today", lifespan=lifespan)

origins = [x.strip() for x in settings.CORS_ORIGINS.split(",") if x.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)


@app.get("/")
def root():
    return {
        "status": "ok",
        "message": "Send POST /pointer/down and /pointer/up, render from GET /state.",
    }


@app.get("/health")
def health():
    return {"status": "ok"}
