"""
Submitted bodies.

The portal's pages post regular HTML forms; scripts and tests may post
JSON. submitted(Model) gives a dependency that accepts either and
validates the fields with Model.
"""

from typing import Type, TypeVar

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


async def read_fields(request: Request) -> dict:
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            body = await request.json()
        except ValueError:
            raise RequestValidationError(
                [{"type": "json_invalid", "loc": ("body",), "msg": "JSON decode error", "input": {}}]
            )
        return body if isinstance(body, dict) else {}

    form = await request.form()
    # browsers send untouched inputs as empty strings
    return {key: value for key, value in form.items() if value != ""}


def submitted(model: Type[ModelT]):
    """
    FastAPI dependency factory - form or JSON body validated as model.

    Usage:
        @router.post("/teacher/register")
        async def route(data: TeacherRegister = Depends(submitted(TeacherRegister))):
            ...
    """
    async def dependency(request: Request) -> ModelT:
        fields = await read_fields(request)
        try:
            return model.model_validate(fields)
        except ValidationError as e:
            raise RequestValidationError(e.errors(include_url=False))

    return dependency
