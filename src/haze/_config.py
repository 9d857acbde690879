"""Probe configuration: the settings one probing run is built from.

Configs are plain dicts (JSON/YAML shape) parsed into a frozen ProbeConfig:

    dict / YAML file → parse_probe_config() → ProbeConfig
        → .matchers() / .filters() / .expression() / .transport()

Range strings and the match expression are validated at load time, so a
config that parses cleanly never fails later while building predicates.

Example YAML::

    host: https://target.example
    request_files: [captured.req]
    proxy: http://127.0.0.1:8080
    match_codes: "200-299,301,302"
    filter_lengths: "0"
    match_expression: 'code == "200" and size != "0"'
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

import structlog
import yaml

from haze._classify import filter_codes, filter_lengths, match_codes, match_lengths
from haze._ranges import RangeParseError, parse_ranges
from haze.http._request import RequestParseError, parse_request
from haze.http._transport import DEFAULT_TIMEOUT, Transport
from haze.matchlang import MatchSyntaxError, parse

if TYPE_CHECKING:
    from haze._predicate import Predicate
    from haze.http._request import ParsedRequest
    from haze.http._response import Response
    from haze.matchlang import Ast

logger = structlog.get_logger(__name__)

DEFAULT_MATCH_CODES = "200-299,301,302,307,401,403,405,500"
DEFAULT_THREADS = 10


class ConfigParseError(Exception):
    """Error parsing a config dict into a ProbeConfig."""


@dataclass(frozen=True, slots=True)
class ProbeConfig:
    """Settings for one probing run.

    The status-code matcher is always active (``match_codes`` has a
    default); the length matcher and both filters only when set.
    """

    host: str
    request_files: tuple[str, ...] = ()
    proxy: str | None = None
    verify_tls: bool = False
    timeout: float = DEFAULT_TIMEOUT
    threads: int = DEFAULT_THREADS
    match_codes: str = DEFAULT_MATCH_CODES
    match_lengths: str | None = None
    filter_codes: str | None = None
    filter_lengths: str | None = None
    match_expression: str | None = None
    extra: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    def matchers(self) -> list[Predicate[Response]]:
        result = [match_codes(self.match_codes)]
        if self.match_lengths:
            result.append(match_lengths(self.match_lengths))
        return result

    def filters(self) -> list[Predicate[Response]]:
        result = []
        if self.filter_codes:
            result.append(filter_codes(self.filter_codes))
        if self.filter_lengths:
            result.append(filter_lengths(self.filter_lengths))
        return result

    def expression(self) -> Ast | None:
        """The parsed match expression, or None when not configured."""
        if self.match_expression is None:
            return None
        return parse(self.match_expression)

    def transport(self) -> Transport:
        """Build the run's transport. The caller owns (and closes) it."""
        return Transport.create(
            proxy=self.proxy, verify=self.verify_tls, timeout=self.timeout
        )

    def load_templates(self) -> list[ParsedRequest]:
        """Read and parse every request file.

        Raises:
            ConfigParseError: If a file cannot be read or parsed.
        """
        templates = []
        for path in self.request_files:
            try:
                raw = Path(path).read_bytes()
                templates.append(parse_request(raw))
            except (OSError, RequestParseError) as e:
                msg = f"request file {path!r}: {e}"
                raise ConfigParseError(msg) from e
        return templates


# ═══════════════════════════════════════════════════════════════════════════════
# Parsing (dict → ProbeConfig)
# ═══════════════════════════════════════════════════════════════════════════════

_RANGE_FIELDS = ("match_codes", "match_lengths", "filter_codes", "filter_lengths")
_KNOWN_FIELDS = frozenset(
    {
        "host",
        "request_files",
        "proxy",
        "verify_tls",
        "timeout",
        "threads",
        "match_expression",
        *_RANGE_FIELDS,
    }
)


def parse_probe_config(data: dict[str, Any]) -> ProbeConfig:
    """Parse a dict into a ProbeConfig.

    Unknown top-level keys are kept in ``extra`` for the host application.

    Raises:
        ConfigParseError: If the dict is malformed.
    """
    if not isinstance(data, dict):
        msg = f"expected dict, got {type(data).__name__}"
        raise ConfigParseError(msg)

    host = data.get("host")
    if host is None:
        msg = "missing required field 'host'"
        raise ConfigParseError(msg)
    if not isinstance(host, str) or not host:
        msg = "'host' must be a non-empty string"
        raise ConfigParseError(msg)

    kwargs: dict[str, Any] = {"host": host}
    kwargs["request_files"] = _parse_request_files(data.get("request_files", []))

    for name in ("proxy", "match_expression", *_RANGE_FIELDS):
        value = data.get(name)
        if value is None:
            continue
        # YAML turns a bare `match_codes: 200` into an int.
        if isinstance(value, int) and not isinstance(value, bool) and name in _RANGE_FIELDS:
            value = str(value)
        if not isinstance(value, str):
            msg = f"'{name}' must be a string, got {type(value).__name__}"
            raise ConfigParseError(msg)
        kwargs[name] = value

    if "verify_tls" in data:
        if not isinstance(data["verify_tls"], bool):
            msg = f"'verify_tls' must be a bool, got {type(data['verify_tls']).__name__}"
            raise ConfigParseError(msg)
        kwargs["verify_tls"] = data["verify_tls"]

    if "timeout" in data:
        kwargs["timeout"] = _parse_positive(data["timeout"], "timeout", (int, float))
    if "threads" in data:
        kwargs["threads"] = _parse_positive(data["threads"], "threads", (int,))

    kwargs["extra"] = {k: v for k, v in data.items() if k not in _KNOWN_FIELDS}

    config = ProbeConfig(**kwargs)
    _validate(config)
    return config


def load_probe_config(path: str | Path) -> ProbeConfig:
    """Load a ProbeConfig from a YAML (or JSON) file.

    Raises:
        ConfigParseError: If the file cannot be read, is not valid YAML, or
            does not describe a valid config.
    """
    try:
        with Path(path).open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        msg = f"cannot read config {str(path)!r}: {e}"
        raise ConfigParseError(msg) from e
    except yaml.YAMLError as e:
        msg = f"invalid YAML in {str(path)!r}: {e}"
        raise ConfigParseError(msg) from e

    config = parse_probe_config(data)
    logger.info(
        "config_loaded",
        path=str(path),
        host=config.host,
        request_files=len(config.request_files),
    )
    return config


def _parse_request_files(value: Any) -> tuple[str, ...]:
    if isinstance(value, str):
        return (value,)
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        msg = "'request_files' must be a string or a list of strings"
        raise ConfigParseError(msg)
    return tuple(value)


def _parse_positive(value: Any, name: str, types: tuple[type, ...]) -> Any:
    if isinstance(value, bool) or not isinstance(value, types):
        msg = f"'{name}' must be a number, got {type(value).__name__}"
        raise ConfigParseError(msg)
    if value <= 0:
        msg = f"'{name}' must be positive, got {value}"
        raise ConfigParseError(msg)
    return value


def _validate(config: ProbeConfig) -> None:
    """Check range strings and the match expression eagerly."""
    for name in _RANGE_FIELDS:
        value = getattr(config, name)
        if value is None:
            continue
        try:
            parse_ranges(value)
        except RangeParseError as e:
            msg = f"'{name}': {e}"
            raise ConfigParseError(msg) from e

    if config.match_expression is not None:
        try:
            parse(config.match_expression)
        except MatchSyntaxError as e:
            msg = f"'match_expression': {e}"
            raise ConfigParseError(msg) from e
