import logging
from typing import Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from backend.app.schemas.models import ErrorDetail, ErrorResponse, FieldError
from src.errors import MaintenanceValidationError

logger = logging.getLogger(__name__)

VALIDATION_ERROR = 'VALIDATION_ERROR'
MAINTENANCE_PREDICTION_ERROR = 'MAINTENANCE_PREDICTION_ERROR'
FLEET_INSIGHTS_ERROR = 'FLEET_INSIGHTS_ERROR'

# request locations FastAPI prefixes to every error loc
_LOCATION_PREFIXES = {'body', 'query', 'path', 'header'}
_EQUIPMENT_ID_FIELDS = {'equipment_data', 'equipment_data.equipment_id'}


class APIError(Exception):
    """An error the gateway reports as `{"error": {"code", "message"}}` with a given status."""

    def __init__(self, status_code: int, code: str, message: str, fields: Optional[List[Dict[str, str]]] = None):
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.message = message
        self.fields = fields


def error_response(status_code: int, code: str, message: str,
                   fields: Optional[List[Dict[str, str]]] = None) -> JSONResponse:
    body = ErrorResponse(error=ErrorDetail(
        code=code,
        message=message,
        fields=[FieldError(**f) for f in fields] if fields is not None else None,
    ))
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def request_validation_fields(exc: RequestValidationError) -> List[Dict[str, str]]:
    fields = []
    for err in exc.errors():
        loc = [str(part) for part in err.get('loc', ())]
        if loc and loc[0] in _LOCATION_PREFIXES:
            loc = loc[1:]
        fields.append({'field': '.'.join(loc) or 'body', 'message': err.get('msg', 'Invalid value')})
    return fields


def register_exception_handlers(app: FastAPI):
    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError):
        return error_response(exc.status_code, exc.code, exc.message, exc.fields)

    @app.exception_handler(MaintenanceValidationError)
    async def maintenance_validation_handler(request: Request, exc: MaintenanceValidationError):
        logger.info("Rejected %s %s: %s", request.method, request.url.path, exc.message)
        return error_response(400, VALIDATION_ERROR, exc.message, exc.fields)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        fields = request_validation_fields(exc)
        if any(f['field'] in _EQUIPMENT_ID_FIELDS for f in fields):
            message = "equipment_data with equipment_id is required"
        else:
            message = "Request validation failed"
        logger.info("Rejected %s %s: %d invalid field(s)", request.method, request.url.path, len(fields))
        return error_response(400, VALIDATION_ERROR, message, fields)
