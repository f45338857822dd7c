"""Lookup table construction for redirect rules."""

from typing import Dict, Iterable
import structlog

from .models import PathRule

logger = structlog.get_logger(__name__)


def build_map(rules: Iterable[PathRule]) -> Dict[str, str]:
    """Fold ordered rules into a path to URL mapping.
    
    Rules are applied in order, so when a path appears more than once the
    URL of the last occurrence wins.
    """
    path_map: Dict[str, str] = {}
    
    for rule in rules:
        previous = path_map.get(rule.path)
        if previous is not None and previous != rule.url:
            logger.debug("Duplicate redirect path overwritten",
                         path=rule.path,
                         previous_url=previous,
                         url=rule.url)
        path_map[rule.path] = rule.url
    
    return path_map
