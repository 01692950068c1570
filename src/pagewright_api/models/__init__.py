from pagewright_api.models.responses import (
    OperationResponse as OperationResponse,
    ErrorResponse as ErrorResponse,
)
