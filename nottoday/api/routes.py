from fastapi import APIRouter, Depends, Request

from nottoday.api.auth import require_api_key
from nottoday.api.schemas import CircleResponse, HapticsResponse, PointerKind, RenderSnapshot
from nottoday.core.controller import InteractionController
from nottoday.core.haptics import QueuedVibrator

router = APIRouter(dependencies=[Depends(require_api_key)])


def get_controller(request: Request) -> InteractionController:
    return request.app.state.controller


def get_vibrator(request: Request):
    return getattr(request.app.state, "vibrator", None)


# ---------------------------------------------------------------------------
# Handlers are async on purpose: they run on the event loop that also fires
# the choreography timers, which keeps the controller single-writer.
# ---------------------------------------------------------------------------

@router.post("/pointer/{kind}", response_model=RenderSnapshot)
async def pointer_event(kind: PointerKind, controller: InteractionController = Depends(get_controller)):
    controller.handle_pointer(kind)
    return controller.snapshot()


@router.get("/state", response_model=RenderSnapshot)
async def get_state(controller: InteractionController = Depends(get_controller)):
    return controller.snapshot()


@router.get("/haptics", response_model=HapticsResponse)
async def drain_haptics(vibrator=Depends(get_vibrator)):
    """Patterns queued since the last call; the client plays them in order."""
    if not isinstance(vibrator, QueuedVibrator):
        return HapticsResponse(available=False)
    return HapticsResponse(available=True, patterns=vibrator.drain())


@router.get("/circle", response_model=CircleResponse)
async def get_circle(request: Request):
    lines = getattr(request.app.state, "circle_lines", None) or []
    return CircleResponse(lines=[line.to_dict() for line in lines])
