"""Decoders for redirect rule documents.

Rules are supplied as a list of records, each with a ``path`` and a ``url``
string field::

    - path: /some-path
      url: https://www.some-url.com/demo

The same shape is accepted as a JSON array of objects.
"""

import json
from pathlib import Path
from typing import Any, List, Union

import structlog
import yaml
from pydantic import TypeAdapter, ValidationError

from urlshort.exceptions import DecodeError, RedirectConfigNotFound
from .models import PathRule

logger = structlog.get_logger(__name__)

_rules_adapter = TypeAdapter(List[PathRule])

RawDocument = Union[bytes, str]


def parse_yaml(data: RawDocument, source: str = "<yaml>") -> List[PathRule]:
    """Decode a YAML list of path/url records."""
    try:
        document = yaml.safe_load(data)
    except yaml.YAMLError as exc:
        raise DecodeError(source, f"invalid YAML: {exc}") from exc
    
    return _validate_rules(document, source)


def parse_json(data: RawDocument, source: str = "<json>") -> List[PathRule]:
    """Decode a JSON array of path/url objects."""
    if not data.strip():
        return []
    
    try:
        document = json.loads(data)
    except ValueError as exc:
        # Covers JSONDecodeError and undecodable bytes
        raise DecodeError(source, f"invalid JSON: {exc}") from exc
    
    return _validate_rules(document, source)


def load_path_rules(path: Union[str, Path]) -> List[PathRule]:
    """Read redirect rules from a file, choosing the decoder by suffix."""
    file_path = Path(path)
    
    if not file_path.exists():
        raise RedirectConfigNotFound(str(file_path))
    
    data = file_path.read_bytes()
    
    if file_path.suffix.lower() == ".json":
        rules = parse_json(data, source=str(file_path))
    else:
        rules = parse_yaml(data, source=str(file_path))
    
    logger.info("Loaded redirect rules", path=str(file_path), rules=len(rules))
    return rules


def _validate_rules(document: Any, source: str) -> List[PathRule]:
    """Check the decoded document against the record list shape."""
    # An empty document carries no rules
    if document is None:
        return []
    
    try:
        return _rules_adapter.validate_python(document)
    except ValidationError as exc:
        raise DecodeError(source, _describe_errors(exc)) from exc


def _describe_errors(exc: ValidationError) -> str:
    """Flatten validation errors into a single readable line."""
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"])
        if location:
            problems.append(f"record {location}: {error['msg']}")
        else:
            problems.append(error["msg"])
    return "; ".join(problems)
