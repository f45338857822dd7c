"""Redirect rules package: parse, build and serve path redirects."""

from .models import PathRule
from .parser import parse_yaml, parse_json, load_path_rules
from .builder import build_map
from .handler import map_handler, yaml_handler, json_handler

__all__ = [
    "PathRule",
    "parse_yaml",
    "parse_json",
    "load_path_rules",
    "build_map",
    "map_handler",
    "yaml_handler",
    "json_handler"
]
