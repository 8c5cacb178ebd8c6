from pydantic import BaseModel, Field

from colorsaver.internal.collection import ColorRecord
from colorsaver.internal.session import SessionController


class ColorRecordResponse(BaseModel):
    id: str
    name: str
    value: str

    @classmethod
    def from_record(cls, record: ColorRecord) -> "ColorRecordResponse":
        return cls(id=record.id, name=record.name, value=str(record.value))


class ColorListResponse(BaseModel):
    colors: list[ColorRecordResponse]


class TextInputRequestModel(BaseModel):
    text: str


class ChannelsRequestModel(BaseModel):
    r: int = Field(ge=0, le=255)
    g: int = Field(ge=0, le=255)
    b: int = Field(ge=0, le=255)


class NameRequestModel(BaseModel):
    name: str


class SaveColorRequestModel(BaseModel):
    name: str
    color: str


class SessionResponse(BaseModel):
    state: str
    input_text: str
    channels: ChannelsRequestModel
    color: str | None
    name: str
    suggestion: str | None

    @classmethod
    def from_controller(cls, controller: SessionController) -> "SessionResponse":
        r, g, b = controller.channels
        return cls(
            state=controller.state.value,
            input_text=controller.input_text,
            channels=ChannelsRequestModel(r=r, g=g, b=b),
            color=str(controller.color) if controller.color is not None else None,
            name=controller.name,
            suggestion=controller.suggestion,
        )


class PaletteMatchResponse(BaseModel):
    color: str | None
    name: str | None
