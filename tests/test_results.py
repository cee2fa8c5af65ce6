"""
Tests for result post-processing.

Tests:
- Nested JSON decode of replay rows
- Exact-match promotion
- Result cap
"""

import json

import pytest
from conftest import envelope, replay_row

from packages.analytics.results import (
    cap_results,
    decode_replays,
    parse_envelope,
    process_game_search,
    process_rows,
    rerank_exact_matches,
    split_query_terms,
)
from packages.shared.enums import RowKind
from packages.shared.types import ReplayRecord
from proxy_core.exceptions import BackendUnavailableError


class TestNestedDecode:
    """Tests for ReplayRecord decoding."""

    def test_builds_and_players_become_structured(self):
        row = replay_row(1, "Nova", "Raynor", builds=[["Pylon"], ["SCV"]])

        decoded = ReplayRecord.model_validate(row).to_row()

        assert decoded["players"] == [
            {"name": "Nova", "race": "Protoss"},
            {"name": "Raynor", "race": "Protoss"},
        ]
        assert decoded["builds"] == [["Pylon"], ["SCV"]]
        assert decoded["id"] == 1
        assert decoded["map"] == "Altitude LE"

    def test_already_structured_values_pass_through(self):
        row = {"id": 2, "players": [{"name": "Nova"}], "builds": []}

        assert ReplayRecord.model_validate(row).to_row() == row

    def test_malformed_json_left_as_is(self):
        row = {"id": 3, "players": "not json", "builds": "[]"}

        decoded = ReplayRecord.model_validate(row).to_row()

        assert decoded["players"] == "not json"
        assert decoded["builds"] == []

    def test_missing_columns_not_added(self):
        decoded = ReplayRecord.model_validate({"id": 4}).to_row()

        assert decoded == {"id": 4}

    def test_player_names_from_mapping(self):
        record = ReplayRecord.model_validate({"players": json.dumps({"1": {"name": "Nova"}, "2": {"name": "Kerrigan"}})})

        assert record.player_names == ["Nova", "Kerrigan"]

    def test_process_rows_only_decodes_replays(self):
        rows = [{"name": "Nova", "builds": "[1]"}]

        assert process_rows(rows, RowKind.GENERIC) == rows
        assert process_rows(rows, RowKind.REPLAY) == [{"name": "Nova", "builds": [1]}]

    def test_column_order_kept(self):
        row = {"id": 5, "map": "Altitude LE", "builds": "[]", "players": "[]", "date": "2024-01-01"}

        decoded = ReplayRecord.model_validate(row).to_row()

        assert list(decoded) == ["id", "map", "builds", "players", "date"]

    def test_timeline_series_decoded(self):
        rows = [{"second": 60, "values": "[12, 14, 20]", "label": "[not json", "player": "Nova"}]

        decoded = process_rows(rows, RowKind.TIMELINE)

        assert decoded == [{"second": 60, "values": [12, 14, 20], "label": "[not json", "player": "Nova"}]
        assert list(decoded[0]) == ["second", "values", "label", "player"]

    def test_timeline_scalar_strings_untouched(self):
        rows = [{"second": "60", "race": "Zerg", "meta": '{"a": 1}'}]

        assert process_rows(rows, RowKind.TIMELINE) == rows


class TestRerank:
    """Tests for exact-match promotion."""

    def _ids(self, records):
        return [record.to_row()["id"] for record in records]

    def test_exact_matches_first_stable(self):
        records = decode_replays([
            replay_row("A", "Zeratul"),
            replay_row("B", "nova", "Zeratul"),
            replay_row("C", "Novastar"),
            replay_row("D", "Raynor", "Nova"),
        ])

        ranked = rerank_exact_matches(records, "nova")

        assert self._ids(ranked) == ["B", "D", "A", "C"]

    def test_no_query_keeps_backend_order(self):
        records = decode_replays([replay_row(i, "Nova") for i in range(3)])

        assert self._ids(rerank_exact_matches(records, None)) == [0, 1, 2]
        assert self._ids(rerank_exact_matches(records, "")) == [0, 1, 2]

    def test_any_term_matches(self):
        records = decode_replays([
            replay_row(1, "Zeratul"),
            replay_row(2, "Kerrigan"),
            replay_row(3, "Raynor"),
        ])

        ranked = rerank_exact_matches(records, "raynor+KERRIGAN")

        assert self._ids(ranked) == [2, 3, 1]

    def test_split_query_terms(self):
        assert split_query_terms("Nova+Raynor") == ["nova", "raynor"]
        assert split_query_terms("Nova Raynor") == ["nova", "raynor"]
        assert split_query_terms("+nova++") == ["nova"]
        assert split_query_terms(None) == []


class TestCap:
    """Tests for the game search result cap."""

    def test_cap_keeps_first_entries(self):
        assert cap_results(list(range(25)), 20) == list(range(20))

    def test_game_search_caps_after_promotion(self):
        rows = [replay_row(i, "Zeratul") for i in range(20)]
        rows += [replay_row(100 + i, "Nova") for i in range(5)]

        result = process_game_search(rows, "nova", limit=20)

        assert len(result) == 20
        assert [row["id"] for row in result[:5]] == [100, 101, 102, 103, 104]
        assert [row["id"] for row in result[5:]] == list(range(15))

    def test_game_search_caps_without_query(self):
        rows = [replay_row(i, "Nova") for i in range(25)]

        result = process_game_search(rows, None, limit=20)

        assert [row["id"] for row in result] == list(range(20))


class TestEnvelope:
    """Tests for pipe response parsing."""

    def test_parse_envelope(self):
        parsed = parse_envelope("sc2_search", envelope([{"id": 1}]))

        assert parsed.data == [{"id": 1}]
        assert parsed.rows == 1
        assert parsed.statistics["rows_read"] == 1

    def test_unexpected_metadata_accepted(self):
        body = json.dumps({
            "meta": {"columns": ["id"]},
            "data": [{"id": 1}],
            "rows": "1",
            "statistics": {"elapsed": "fast", "rows_read": 1.5},
        })

        assert parse_envelope("sc2_search", body).data == [{"id": 1}]

    def test_malformed_body_raises(self):
        with pytest.raises(BackendUnavailableError):
            parse_envelope("sc2_search", "<html>bad gateway</html>")
