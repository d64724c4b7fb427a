from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


# =========================
# AUTH
# =========================
class LoginRequest(BaseModel):
    # Both are required, but a missing field must answer 400 rather than 422
    name: Optional[str] = None
    email: Optional[str] = None


class SessionUser(BaseModel):
    name: str
    email: str


# =========================
# TABLES
# =========================
class ColumnDescriptor(BaseModel):
    name: str
    type: str
    primary_key: bool = Field(default=False, serialization_alias="pk")


class TableSnapshot(BaseModel):
    rows: List[Dict[str, Any]] = Field(default_factory=list)
    columns: List[ColumnDescriptor] = Field(default_factory=list)

    @classmethod
    def empty(cls) -> "TableSnapshot":
        return cls()


class TableSummary(BaseModel):
    columns: List[ColumnDescriptor]
    rows: int


# =========================
# SQL EXECUTION
# =========================
class ExecuteSQLRequest(BaseModel):
    query: Optional[str] = None


class QueryResult(BaseModel):
    type: Literal["query"] = "query"
    message: str
    data: List[Dict[str, Any]]


class DualQueryResult(BaseModel):
    type: Literal["dual_query"] = "dual_query"
    message: str
    previous_data: TableSnapshot = Field(serialization_alias="previousData")
    updated_data: TableSnapshot = Field(serialization_alias="updatedData")


class ErrorResult(BaseModel):
    type: Literal["error"] = "error"
    message: str
    status_code: int = Field(default=500, exclude=True)


ExecutionResult = Annotated[
    Union[QueryResult, DualQueryResult, ErrorResult], Field(discriminator="type")
]


class ErrorResponse(BaseModel):
    type: Literal["error"] = "error"
    message: str

    model_config = ConfigDict(from_attributes=True)
