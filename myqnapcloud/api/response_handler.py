# myqnapcloud/api/response_handler.py

from typing import Dict, Any, List, Union, Mapping, Type, TypeVar, get_args, get_origin, get_type_hints
from dataclasses import MISSING, fields, is_dataclass
import json
import logging
import types

from .errors import DecodeError, ErrorResult

T = TypeVar('T')
logger = logging.getLogger(__name__)

def is_success(status: int) -> bool:
    """A response is successful when its status code is 2xx"""
    return 200 <= status <= 299

def _zero_value(annotation: Any) -> Any:
    """Value a field takes when its key is missing from the body"""
    origin = get_origin(annotation)
    if origin in (Union, types.UnionType) and type(None) in get_args(annotation):
        return None
    if origin in (list, List):
        return []
    if origin in (dict, Dict):
        return {}
    if is_dataclass(annotation):
        return decode_model(annotation, {})
    if annotation in (str, int, float, bool):
        return annotation()
    return None

def _decode_value(annotation: Any, value: Any, path: str) -> Any:
    if annotation is Any:
        return value

    origin = get_origin(annotation)
    if origin in (Union, types.UnionType):
        args = get_args(annotation)
        if value is None and type(None) in args:
            return None
        errors = []
        for arg in args:
            if arg is type(None):
                continue
            try:
                return _decode_value(arg, value, path)
            except DecodeError as e:
                errors.append(e.message)
        raise DecodeError(f"{path}: no matching type for {value!r}", {"errors": errors})

    # null leaves the zero value
    if value is None:
        return _zero_value(annotation)

    if origin in (list, List):
        if not isinstance(value, list):
            raise DecodeError(f"{path}: expected array, got {type(value).__name__}")
        (item_type,) = get_args(annotation) or (Any,)
        return [_decode_value(item_type, item, f"{path}[{i}]") for i, item in enumerate(value)]

    if origin in (dict, Dict):
        if not isinstance(value, dict):
            raise DecodeError(f"{path}: expected object, got {type(value).__name__}")
        _, value_type = get_args(annotation) or (str, Any)
        return {k: _decode_value(value_type, v, f"{path}.{k}") for k, v in value.items()}

    if is_dataclass(annotation):
        return decode_model(annotation, value, path)

    if annotation is bool:
        if isinstance(value, bool):
            return value
    elif annotation is int:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    elif annotation is float:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            try:
                return float(value)
            except OverflowError as e:
                raise DecodeError(f"{path}: {value!r} out of float range") from e
    elif annotation is str:
        if isinstance(value, str):
            return value
    elif annotation in (dict, list):
        if isinstance(value, annotation):
            return value
    else:
        return value

    raise DecodeError(
        f"{path}: expected {getattr(annotation, '__name__', annotation)}, "
        f"got {type(value).__name__}"
    )

def decode_model(model: Type[T], data: Any, path: str = "$") -> T:
    """
    Decode parsed JSON into ``model``.

    Dataclass fields are matched by name, or by ``metadata["json"]`` when a
    field uses a different wire key. Unknown keys are ignored and missing
    keys fall back to the field default. ``metadata["aliases"]`` lists extra
    wire keys accepted for a field.

    Raises:
        DecodeError: the data does not fit the model
    """
    if not is_dataclass(model):
        return _decode_value(model, data, path)

    if not isinstance(data, dict):
        raise DecodeError(f"{path}: expected object, got {type(data).__name__}")

    hints = get_type_hints(model)
    kwargs: Dict[str, Any] = {}
    for f in fields(model):
        if not f.init:
            continue
        keys = [f.metadata.get("json", f.name), *f.metadata.get("aliases", ())]
        key = next((k for k in keys if k in data), None)
        annotation = hints.get(f.name, Any)
        if key is None:
            if f.default is not MISSING or f.default_factory is not MISSING:
                continue
            kwargs[f.name] = _zero_value(annotation)
        else:
            kwargs[f.name] = _decode_value(annotation, data[key], f"{path}.{key}")
    return model(**kwargs)

def build_error_result(
    method: str,
    url: str,
    status: int,
    headers: Mapping[str, str],
    body: bytes
) -> ErrorResult:
    """
    Turn a non-2xx body into an ErrorResult

    Raises:
        DecodeError: the body is not a JSON object with a string ``message``
            and integer ``code``
    """
    try:
        data = json.loads(body)
    except (TypeError, ValueError) as e:
        raise DecodeError(
            f"{method} {url}: {status} with undecodable error body: {str(e)}",
            {"status": status, "body": body[:1024].decode("utf-8", "replace")}
        ) from e

    if not isinstance(data, dict):
        raise DecodeError(f"{method} {url}: {status} error body is not a JSON object")

    message = _decode_value(str, data.get("message", ""), "$.message")
    code = _decode_value(int, data.get("code", 0), "$.code")
    details = {k: v for k, v in data.items() if k not in ("message", "code")}

    return ErrorResult(
        message=message,
        code=code,
        method=method,
        url=url,
        status=status,
        headers=headers,
        details=details
    )

async def check_response(request: Any, response: Any) -> None:
    """
    Check the API response for errors, and raise them if present.

    A response is an error when its status code is outside 200-299. The
    body of a successful response is left unread for the caller.

    Args:
        request: The PreparedRequest that produced the response
        response: The TransportResponse to classify

    Raises:
        ErrorResult: a decodable API error
        DecodeError: the error body could not be decoded
    """
    if is_success(response.status):
        return

    body = await response.read()
    error = build_error_result(request.method, request.url, response.status, response.headers, body)
    logger.info(f"API error: {error} (code {error.code})")
    raise error
