from typing import Literal

from pydantic import BaseModel

ProjectStatusLiteral = Literal["draft", "active", "completed", "archived"]
CalculationStatusLiteral = Literal["draft", "calculated", "verified", "approved"]


class MessageResponse(BaseModel):
    message: str


class ProjectStatusUpdate(BaseModel):
    status: ProjectStatusLiteral


class CalculationStatusUpdate(BaseModel):
    status: CalculationStatusLiteral
