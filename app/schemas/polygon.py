from typing import List, Tuple, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, StrictFloat, StrictInt

# Только числа: строки вида "1.5" и bool не принимаются
Coordinate = Union[StrictInt, StrictFloat]

# Вершина контура: (долгота, широта)
Vertex = Tuple[Coordinate, Coordinate]


class PolygonBase(BaseModel):
    name: str = Field(..., description="Название полигона (не уникально)")
    coordinates: List[Vertex] = Field(
        ...,
        description="Упорядоченный список точек [[lon, lat], …]; порядок задаёт контур"
    )


class PolygonCreate(PolygonBase):
    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(
        ...,
        alias="sessionId",
        min_length=1,
        max_length=64,
        description="Токен сессии клиента; после создания не меняется"
    )


class PolygonUpdate(PolygonBase):
    # sessionId намеренно отсутствует: менять его нельзя
    pass


class PolygonOut(PolygonBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    session_id: str = Field(
        ...,
        validation_alias=AliasChoices("session_id", "sessionId"),
        serialization_alias="sessionId",
    )


class MessageOut(BaseModel):
    message: str
