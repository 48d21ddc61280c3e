"""
Tests for the record codec.

These tests verify that:
1. Legacy connector tags keep the behavior they always had
2. Structural problems raise RecordFormatError
3. Connector problems raise InvalidConfigurationError
4. A stored output record re-aggregates to its stored decision
"""

import json

import pytest

from decide.codec import (
    RecordFormatError,
    dumps_output,
    input_to_record,
    loads_input,
    loads_output,
    parse_connector,
    parse_input_record,
    parse_output_record,
    read_input_file,
    write_output_file,
)
from decide.domain import (
    NUM_CONDITIONS,
    ConfigurationCheck,
    Connector,
    InvalidConfigurationError,
    LaunchDecision,
    Parameters,
    Point,
)
from decide.engine import decide
from decide.launch import aggregate_launch


N = NUM_CONDITIONS

VALID_PARAMETERS = {
    "RADIUS1": 1, "RADIUS2": 1, "LENGTH1": 3, "LENGTH2": 1, "DIST": 1,
    "EPSILON": 0.1, "QUADS": 1, "AREA1": 1, "AREA2": 1,
    "A_PTS": 1, "B_PTS": 1, "C_PTS": 1, "D_PTS": 1, "E_PTS": 1,
    "F_PTS": 1, "G_PTS": 1, "K_PTS": 1, "N_PTS": 3, "Q_PTS": 2,
}


def _record(points=None, tag="ORR", puv=None, parameters=None):
    """Legacy-format input record."""
    points = points if points is not None else [[0, 0], [0, 5]]
    return {
        "NUMPOINTS": len(points),
        "POINTS": points,
        "LCM": {str(i): [tag] * N for i in range(N)},
        "PUV": puv if puv is not None else [False] * N,
        "PARAMETERS": parameters if parameters is not None else dict(VALID_PARAMETERS),
    }


# =============================================================================
# CONNECTOR TAG TESTS
# =============================================================================

class TestConnectorTags:
    """Wire tags to Connector."""

    @pytest.mark.parametrize("tag, expected", [
        ("ANDD", Connector.AND),
        ("NOTUSED", Connector.OR),
        ("ORR", Connector.NOT_USED),
        ("AND", Connector.AND),
        ("OR", Connector.OR),
        ("NOT_USED", Connector.NOT_USED),
    ])
    def test_known_tags(self, tag, expected):
        assert parse_connector(tag, 0, 0) is expected

    @pytest.mark.parametrize("tag", ["XOR", "and", "", None, 1])
    def test_unknown_tags_are_rejected(self, tag):
        with pytest.raises(InvalidConfigurationError) as exc_info:
            parse_connector(tag, 2, 3)
        assert exc_info.value.check == ConfigurationCheck.CONNECTOR
        assert "LCM[2][3]" in exc_info.value.reason

    def test_legacy_notused_tag_combines_with_or(self):
        """A legacy file's "NOTUSED" has always behaved as OR."""
        record = _record(tag="ORR", puv=[True] + [False] * (N - 1))
        record["LCM"]["0"] = ["NOTUSED"] * N
        # CMV[0] holds (distance 5 > LENGTH1 3), so OR passes every cell
        output = decide(parse_input_record(record))
        assert output.pum[0] == (True,) * N
        assert output.launch == LaunchDecision.YES

        record["PARAMETERS"]["LENGTH1"] = 10
        output = decide(parse_input_record(record))
        assert output.cmv[0] is False
        assert output.launch == LaunchDecision.NO


# =============================================================================
# INPUT RECORD TESTS
# =============================================================================

class TestInputRecords:
    """Decoding input records."""

    def test_parse_legacy_record(self):
        snapshot = parse_input_record(_record(points=[[0, 0], [1.5, -2]]))
        assert snapshot.num_points == 2
        assert snapshot.points == (Point(0, 0), Point(1.5, -2))
        assert snapshot.lcm == ((Connector.NOT_USED,) * N,) * N
        assert snapshot.puv == (False,) * N
        assert snapshot.parameters.length1 == 3.0
        assert snapshot.parameters.n_pts == 3

    def test_missing_parameters_default_to_zero(self):
        record = _record(parameters={"LENGTH1": 2.5})
        params = parse_input_record(record).parameters
        assert params.length1 == 2.5
        assert params.q_pts == 0
        assert params.radius1 == 0.0

    def test_missing_parameters_block_defaults(self):
        record = _record()
        del record["PARAMETERS"]
        assert parse_input_record(record).parameters == Parameters()

    def test_integral_float_is_accepted_for_counts(self):
        params = parse_input_record(_record(parameters={"K_PTS": 3.0})).parameters
        assert params.k_pts == 3
        assert isinstance(params.k_pts, int)

    def test_fractional_count_is_rejected(self):
        with pytest.raises(RecordFormatError, match="K_PTS"):
            parse_input_record(_record(parameters={"K_PTS": 2.5}))

    def test_non_numeric_parameter_is_rejected(self):
        with pytest.raises(RecordFormatError, match="RADIUS1"):
            parse_input_record(_record(parameters={"RADIUS1": "big"}))

    def test_lcm_as_list_of_rows(self):
        record = _record()
        record["LCM"] = [["ANDD"] * N for _ in range(N)]
        assert parse_input_record(record).lcm == ((Connector.AND,) * N,) * N

    def test_missing_lcm_row_is_rejected(self):
        record = _record()
        del record["LCM"]["7"]
        with pytest.raises(InvalidConfigurationError) as exc_info:
            parse_input_record(record)
        assert exc_info.value.check == ConfigurationCheck.CONNECTOR

    @pytest.mark.parametrize("field", ["NUMPOINTS", "POINTS", "LCM", "PUV"])
    def test_missing_required_field(self, field):
        record = _record()
        del record[field]
        with pytest.raises(RecordFormatError, match=field):
            parse_input_record(record)

    @pytest.mark.parametrize("points", [[[0, 0], [1]], [[0, 0], ["a", 1]], [[0, 0], [True, 1]], "0,0"])
    def test_malformed_points(self, points):
        record = _record()
        record["POINTS"] = points
        with pytest.raises(RecordFormatError):
            parse_input_record(record)

    def test_invalid_json(self):
        with pytest.raises(RecordFormatError, match="Invalid JSON"):
            loads_input("{not json")

    def test_non_object_document(self):
        with pytest.raises(RecordFormatError):
            loads_input("[1, 2, 3]")

    def test_oversized_float_parameter_is_rejected(self):
        with pytest.raises(RecordFormatError, match="LENGTH1"):
            parse_input_record(_record(parameters={"LENGTH1": 10 ** 400}))

    def test_oversized_parameter_in_json_text_is_rejected(self):
        text = json.dumps(_record()).replace('"LENGTH1": 3', '"LENGTH1": 1' + "0" * 400)
        with pytest.raises(RecordFormatError, match="LENGTH1"):
            loads_input(text)

    def test_oversized_point_is_rejected(self):
        with pytest.raises(RecordFormatError, match=r"POINTS\[1\]"):
            parse_input_record(_record(points=[[0, 0], [10 ** 400, 0]]))

    def test_overlong_integer_literal_is_rejected(self):
        text = json.dumps(_record()).replace('"LENGTH1": 3', '"LENGTH1": 1' + "0" * 5000)
        with pytest.raises(RecordFormatError):
            loads_input(text)

    def test_non_utf8_file_is_rejected(self, tmp_path):
        path = tmp_path / "input1.json"
        path.write_bytes(b'{"NUMPOINTS": 2, "POINTS": "\xff\xfe"}')
        with pytest.raises(RecordFormatError, match="UTF-8"):
            read_input_file(path)

    def test_read_input_file(self, tmp_path):
        path = tmp_path / "input1.json"
        path.write_text(json.dumps(_record()))
        assert read_input_file(path).num_points == 2

    def test_input_to_record_uses_clean_tags(self):
        snapshot = parse_input_record(_record(tag="NOTUSED"))
        record = input_to_record(snapshot)
        assert record["LCM"]["0"] == ["OR"] * N
        assert parse_input_record(record) == snapshot


# =============================================================================
# OUTPUT RECORD TESTS
# =============================================================================

class TestOutputRecords:
    """Encoding and decoding output records."""

    def test_output_layout(self):
        output = decide(parse_input_record(_record()))
        record = json.loads(dumps_output(output))
        assert set(record) == {"LAUNCH", "CMV", "PUM", "FUV"}
        assert record["LAUNCH"] == "YES"
        assert len(record["PUM"]) == N

    def test_stored_record_reaggregates_to_same_decision(self):
        record = _record(
            points=[[0, 0], [3, 0], [3, 4], [-1, 2], [-2, -2]],
            tag="ANDD",
            puv=[True] * N,
        )
        output = decide(parse_input_record(record))
        restored = loads_output(dumps_output(output))
        assert restored == output
        assert aggregate_launch(restored.fuv) == output.launch

    def test_write_output_file_creates_directory(self, tmp_path):
        output = decide(parse_input_record(_record()))
        path = write_output_file(output, tmp_path / "out" / "input1.json")
        assert path.exists()
        assert json.loads(path.read_text())["LAUNCH"] == "YES"

    def test_invalid_launch_value(self):
        record = decide(parse_input_record(_record())).to_record()
        record["LAUNCH"] = "MAYBE"
        with pytest.raises(RecordFormatError, match="LAUNCH"):
            parse_output_record(record)

    def test_short_fuv_is_rejected(self):
        record = decide(parse_input_record(_record())).to_record()
        record["FUV"] = record["FUV"][:3]
        with pytest.raises(RecordFormatError, match="FUV"):
            parse_output_record(record)
