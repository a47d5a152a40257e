"""Parsing utilities turning manifest entries into (name, version hint) pairs."""

import logging
import re
from typing import Optional, Tuple

from requirements.requirement import Requirement

logger = logging.getLogger(__name__)

_NPM_RANGE_PREFIX = re.compile(r"^[\^~]")
_CONSTRAINT_PREFIX = re.compile(r"^\s*(?:===|~=|==|!=|>=|<=|>|<|\^|~|=)\s*")
# PEP 508 direct reference: "name [extras] @ url".
_DIRECT_REFERENCE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*\s*(?:\[[^\]]*\])?\s*@")
# Operators whose version best describes what the requirement declares, best first.
_SPEC_PREFERENCE = ("==", "===", "~=", ">=", ">", "<=", "<", "!=")


def strip_npm_range_prefix(spec: str) -> str:
    """Remove a single leading ``^`` or ``~`` from an npm range."""
    return _NPM_RANGE_PREFIX.sub("", spec)


def strip_constraint(spec: Optional[str]) -> Optional[str]:
    """Reduce a version constraint to the version it names.

    ``"^1.2"`` -> ``"1.2"``, ``">=2.0,<3"`` -> ``"2.0"``; ``"*"`` and empty
    constraints have no version.
    """
    if not spec:
        return None
    first = spec.split(",", 1)[0].strip()
    version = _CONSTRAINT_PREFIX.sub("", first).strip()
    if not version or version == "*":
        return None
    return version


def parse_requirement_line(line: str) -> Optional[Tuple[str, Optional[str]]]:
    """Parse one requirements.txt line into ``(name, version hint)``.

    Blank lines, comments, pip options (``-r``, ``--index-url``, ``-e``) and
    lines that name no registry package (paths, VCS URLs, ``name @ url``
    direct references) return None.
    """
    text = line.split(" #", 1)[0].strip()
    if not text or text.startswith(("#", "-")):
        return None
    if _DIRECT_REFERENCE.match(text):
        logger.debug("Skipping direct reference %r", line)
        return None
    try:
        req = Requirement.parse(text)
    except Exception as exc:  # pylint: disable=broad-exception-caught
        logger.debug("Skipping unparsable requirement %r: %s", line, exc)
        return None
    if not req.name or req.local_file or req.uri or req.vcs:
        return None
    return req.name, _preferred_version(req.specs)


def _preferred_version(specs) -> Optional[str]:
    """Pick the version hint from ``[(op, version), ...]`` independent of set ordering."""
    if not specs:
        return None
    rank = {op: i for i, op in enumerate(_SPEC_PREFERENCE)}
    _op, version = min(specs, key=lambda s: (rank.get(s[0], len(rank)), s[1]))
    return version
