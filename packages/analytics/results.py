"""
Result post-processing.

Turns backend rows into response rows: decodes the nested JSON columns of
replay rows and the series columns of timeline rows, promotes replays whose
players match the search text, and caps the game search result list.
"""

import json
import re
from typing import Any, Dict, List, Optional, Sequence

from pydantic import ValidationError

from proxy_core.constants import DEFAULT_RESULT_LIMIT
from proxy_core.exceptions import BackendUnavailableError
from packages.shared.enums import RowKind
from packages.shared.types import ReplayRecord, SearchResponse, TimelineRow

# `+` arrives decoded as a space when the caller does not escape it
TERM_SEPARATOR = re.compile(r"[+\s]+")


def parse_envelope(pipe: str, body: str) -> SearchResponse:
    """
    Parse a successful pipe response body.

    Raises:
        BackendUnavailableError: the body is not a pipe response envelope
    """
    try:
        return SearchResponse.model_validate_json(body)
    except ValidationError as e:
        raise BackendUnavailableError(pipe, "malformed response body") from e


def decode_replays(rows: Sequence[Dict[str, Any]]) -> List[ReplayRecord]:
    return [ReplayRecord.model_validate(row) for row in rows]


def split_query_terms(query: Optional[str]) -> List[str]:
    """Literal search terms, lower-cased, empty terms dropped."""
    if not query:
        return []
    return [term.lower() for term in TERM_SEPARATOR.split(query) if term]


def is_exact_match(record: ReplayRecord, terms: Sequence[str]) -> bool:
    """True if any player's name equals any term, ignoring case."""
    return any(name.lower() in terms for name in record.player_names)


def rerank_exact_matches(records: Sequence[ReplayRecord], query: Optional[str]) -> List[ReplayRecord]:
    """
    Move exact player-name matches ahead of the other results.

    Backend order is kept within both groups.
    """
    terms = split_query_terms(query)
    if not terms:
        return list(records)

    exact: List[ReplayRecord] = []
    other: List[ReplayRecord] = []
    for record in records:
        (exact if is_exact_match(record, terms) else other).append(record)
    return exact + other


def cap_results(records: Sequence[Any], limit: int = DEFAULT_RESULT_LIMIT) -> List[Any]:
    return list(records[:limit])


def process_rows(rows: Sequence[Dict[str, Any]], row_kind: RowKind) -> List[Dict[str, Any]]:
    """Decode rows according to the pipe's row kind."""
    if row_kind == RowKind.REPLAY:
        return [record.to_row() for record in decode_replays(rows)]
    if row_kind == RowKind.TIMELINE:
        return [TimelineRow.model_validate(row).to_row() for row in rows]
    return [dict(row) for row in rows]


def process_game_search(
    rows: Sequence[Dict[str, Any]],
    query: Optional[str],
    limit: int = DEFAULT_RESULT_LIMIT,
) -> List[Dict[str, Any]]:
    """Decode, rerank and cap game search rows."""
    ranked = rerank_exact_matches(decode_replays(rows), query)
    return [record.to_row() for record in cap_results(ranked, limit)]


def serialize_body(payload: Any) -> str:
    """JSON response body, compact like the analytics API emits it."""
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":"))
