from fastapi import APIRouter, Depends, HTTPException
from colorsaver.dependencies import get_controller
from colorsaver.internal.color_codec import parse_color
from colorsaver.internal.errors import PersistenceError, ValidationError
from colorsaver.internal.models import (
    ChannelsRequestModel,
    ColorListResponse,
    ColorRecordResponse,
    NameRequestModel,
    PaletteMatchResponse,
    SaveColorRequestModel,
    SessionResponse,
    TextInputRequestModel,
)
from colorsaver.internal.session import SessionController


router = APIRouter(
    prefix="/api",
    tags=["colors"]
)


def _list_response(controller: SessionController) -> ColorListResponse:
    return ColorListResponse(colors=[ColorRecordResponse.from_record(r) for r in controller.records()])


@router.get("/session", response_model=SessionResponse)
def get_session(controller: SessionController = Depends(get_controller)):
    return SessionResponse.from_controller(controller)


@router.post("/session/input", response_model=SessionResponse)
def enter_text(req: TextInputRequestModel, controller: SessionController = Depends(get_controller)):
    controller.enter_text(req.text)
    return SessionResponse.from_controller(controller)


@router.post("/session/channels", response_model=SessionResponse)
def enter_channels(req: ChannelsRequestModel, controller: SessionController = Depends(get_controller)):
    controller.enter_channels(req.r, req.g, req.b)
    return SessionResponse.from_controller(controller)


@router.post("/session/name", response_model=SessionResponse)
def set_name(req: NameRequestModel, controller: SessionController = Depends(get_controller)):
    controller.set_name(req.name)
    return SessionResponse.from_controller(controller)


@router.post("/session/save", response_model=ColorRecordResponse)
async def save_session(controller: SessionController = Depends(get_controller)):
    try:
        record = await controller.save()
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PersistenceError as e:
        raise HTTPException(status_code=503, detail=f"Failed to save color: {e}")
    return ColorRecordResponse.from_record(record)


@router.get("/colors", response_model=ColorListResponse)
def get_colors(controller: SessionController = Depends(get_controller)):
    return _list_response(controller)


@router.post("/colors", response_model=ColorRecordResponse)
async def save_color(req: SaveColorRequestModel, controller: SessionController = Depends(get_controller)):
    try:
        record = await controller.save_color(req.name, req.color)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PersistenceError as e:
        raise HTTPException(status_code=503, detail=f"Failed to save color: {e}")
    return ColorRecordResponse.from_record(record)


@router.delete("/colors/{record_id}", response_model=ColorListResponse)
async def delete_color(record_id: str, controller: SessionController = Depends(get_controller)):
    try:
        await controller.delete(record_id)
    except PersistenceError as e:
        raise HTTPException(status_code=503, detail=f"Failed to delete color: {e}")
    return _list_response(controller)


@router.get("/palette/match", response_model=PaletteMatchResponse)
def match_palette(color: str, controller: SessionController = Depends(get_controller)):
    try:
        parsed = parse_color(color)
    except ValidationError:
        return PaletteMatchResponse(color=None, name=None)
    return PaletteMatchResponse(color=str(parsed), name=controller.palette.lookup_exact(parsed))


@router.post("/colors/reload", response_model=ColorListResponse)
async def reload_colors(controller: SessionController = Depends(get_controller)):
    try:
        await controller.load()
    except PersistenceError as e:
        raise HTTPException(status_code=503, detail=f"Failed to load colors: {e}")
    return _list_response(controller)
