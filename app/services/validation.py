import pydantic
from fastapi.exceptions import RequestValidationError

from app.core.errors import ValidationError

# Where FastAPI found the value; not part of the field path.
_REQUEST_SOURCES = ("body", "query", "path", "header", "cookie")


def error_field_paths(errors, *, strip_source: bool = False) -> list[str]:
    paths = []
    for error in errors:
        loc = list(error.get("loc", ()))
        if strip_source and loc and loc[0] in _REQUEST_SOURCES:
            loc = loc[1:]
        path = ".".join(str(part) for part in loc)
        path = path or "__root__"
        if path not in paths:
            paths.append(path)
    return paths


def validation_error_from(exc: pydantic.ValidationError) -> ValidationError:
    return ValidationError(error_field_paths(exc.errors()))


def validation_error_from_request(exc: RequestValidationError) -> ValidationError:
    return ValidationError(error_field_paths(exc.errors(), strip_source=True))
