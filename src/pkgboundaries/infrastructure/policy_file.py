"""Policy file loading and dumping.

The policy document is JSON. Loading is a one-shot blocking read; any
failure is fatal and surfaces as :class:`ConfigParseError`.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from pkgboundaries.domain.document import PolicyDocument
from pkgboundaries.domain.errors import ConfigParseError
from pkgboundaries.domain.policy import Policy

DEFAULT_POLICY_FILENAME = "pkgboundaries.json"

logger = logging.getLogger(__name__)


def parse_policy(text: str, *, path: Path | None = None) -> Policy:
    """Build a Policy from the JSON text of a policy document.

    Raises:
        ConfigParseError: on invalid or too deeply nested JSON, or a
            document that fails validation.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        msg = f"invalid JSON: {exc}"
        raise ConfigParseError(msg, path=path) from exc
    except RecursionError as exc:
        msg = "invalid JSON: document is nested too deeply"
        raise ConfigParseError(msg, path=path) from exc

    try:
        doc = PolicyDocument.model_validate(data)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
            for err in exc.errors()
        )
        msg = f"invalid policy document: {problems}"
        raise ConfigParseError(msg, path=path) from exc

    return Policy.from_document(doc)


def load_policy(path: Path) -> Policy:
    """Read and parse the policy file at *path*."""
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        msg = f"cannot read policy file: {exc.strerror or exc}"
        raise ConfigParseError(msg, path=path) from exc
    except UnicodeDecodeError as exc:
        msg = f"policy file is not valid UTF-8: {exc.reason} at byte {exc.start}"
        raise ConfigParseError(msg, path=path) from exc

    policy = parse_policy(raw, path=path)
    logger.debug(
        "Loaded policy from %s (%d layers, %d rules)",
        path,
        len(policy.layers),
        len(policy.rules),
    )
    return policy


def dump_policy(policy: Policy, *, indent: int = 2) -> str:
    """Serialize *policy* back to JSON, preserving declaration order."""
    return json.dumps(policy.to_document().to_json_dict(), indent=indent)
