from pydantic import BaseModel, Field


class OperationResponse(BaseModel):
    success: bool = True
    download_url: str = Field(serialization_alias='downloadUrl')


class ErrorResponse(BaseModel):
    error: str
