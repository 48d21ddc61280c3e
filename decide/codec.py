"""
Record Codec for the DECIDE Engine.

Reads input records and writes output records in the legacy JSON
layout:

    input:  {"NUMPOINTS", "POINTS", "LCM", "PUV", "PARAMETERS"}
    output: {"LAUNCH", "CMV", "PUM", "FUV"}

Design principles:
- The codec only reshapes data; range checks belong to the engine
- Structural problems (bad JSON, wrong types) raise RecordFormatError
- Connector problems raise InvalidConfigurationError, like the engine

Legacy connector tags are mapped by observed behavior, not by name:
"NOTUSED" has always combined with OR and "ORR" has always meant
not-used. New data should use the clean tags AND / OR / NOT_USED.
"""

from __future__ import annotations

import json
from dataclasses import fields
from pathlib import Path
from typing import Any, Union

from .domain import (
    NUM_CONDITIONS,
    ConfigurationCheck,
    Connector,
    DecideInput,
    DecideOutput,
    InvalidConfigurationError,
    LaunchDecision,
    Parameters,
    Point,
)


# =============================================================================
# CONNECTOR TAGS
# =============================================================================

LEGACY_CONNECTOR_TAGS = {
    "ANDD": Connector.AND,
    "NOTUSED": Connector.OR,
    "ORR": Connector.NOT_USED,
}

CONNECTOR_TAGS = {
    **LEGACY_CONNECTOR_TAGS,
    **{connector.value: connector for connector in Connector},
}


class RecordFormatError(Exception):
    """Raised when a record cannot be read into domain objects."""
    pass


def parse_connector(tag: Any, row: int, column: int) -> Connector:
    """
    Map one wire tag to a Connector.

    Raises:
        InvalidConfigurationError: If the tag is not a known connector
    """
    if isinstance(tag, str) and tag in CONNECTOR_TAGS:
        return CONNECTOR_TAGS[tag]
    raise InvalidConfigurationError(
        ConfigurationCheck.CONNECTOR,
        f"LCM[{row}][{column}] has unrecognized connector {tag!r}",
    )


# =============================================================================
# INPUT PARSING
# =============================================================================

def _parse_points(raw: Any) -> tuple[Point, ...]:
    if not isinstance(raw, list):
        raise RecordFormatError("POINTS must be a list of [x, y] pairs")
    points = []
    for i, pair in enumerate(raw):
        if (
            not isinstance(pair, (list, tuple))
            or len(pair) != 2
            or not all(_is_number(v) for v in pair)
        ):
            raise RecordFormatError(f"POINTS[{i}] is not an [x, y] pair: {pair!r}")
        try:
            points.append(Point.from_pair(pair))
        except OverflowError:
            raise RecordFormatError(f"POINTS[{i}] is out of range: {pair!r}")
    return tuple(points)


def _parse_lcm(raw: Any) -> tuple[tuple[Connector, ...], ...]:
    if isinstance(raw, dict):
        rows = []
        for i in range(NUM_CONDITIONS):
            if str(i) not in raw:
                raise InvalidConfigurationError(
                    ConfigurationCheck.CONNECTOR,
                    f"LCM is missing row {i}",
                )
            rows.append(raw[str(i)])
    elif isinstance(raw, list):
        rows = raw
    else:
        raise RecordFormatError("LCM must be an object keyed by condition index or a list of rows")

    lcm = []
    for i, row in enumerate(rows):
        if not isinstance(row, list):
            raise InvalidConfigurationError(
                ConfigurationCheck.CONNECTOR,
                f"LCM row {i} is not a list",
            )
        lcm.append(tuple(parse_connector(tag, i, j) for j, tag in enumerate(row)))
    return tuple(lcm)


def _parse_parameters(raw: Any) -> Parameters:
    if raw is None:
        return Parameters()
    if not isinstance(raw, dict):
        raise RecordFormatError("PARAMETERS must be an object")

    values = {}
    for f in fields(Parameters):
        wire_name = f.name.upper()
        if wire_name not in raw:
            continue
        value = raw[wire_name]
        if not _is_number(value):
            raise RecordFormatError(f"PARAMETERS.{wire_name} is not a number: {value!r}")
        if f.type == "int":
            if isinstance(value, float) and not value.is_integer():
                raise RecordFormatError(f"PARAMETERS.{wire_name} must be an integer: {value!r}")
        try:
            value = int(value) if f.type == "int" else float(value)
        except (OverflowError, ValueError):
            raise RecordFormatError(f"PARAMETERS.{wire_name} is out of range: {value!r}")
        values[f.name] = value
    return Parameters(**values)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def parse_input_record(record: dict) -> DecideInput:
    """
    Convert a decoded input record into a DecideInput.

    Raises:
        RecordFormatError: If required fields are missing or mistyped
        InvalidConfigurationError: If the LCM holds unknown connectors
    """
    if not isinstance(record, dict):
        raise RecordFormatError("Input record must be a JSON object")

    for required in ("NUMPOINTS", "POINTS", "LCM", "PUV"):
        if required not in record:
            raise RecordFormatError(f"Input record missing required field: {required}")

    num_points = record["NUMPOINTS"]
    if not isinstance(num_points, int) or isinstance(num_points, bool):
        raise RecordFormatError(f"NUMPOINTS must be an integer: {num_points!r}")

    puv = record["PUV"]
    if not isinstance(puv, list):
        raise RecordFormatError("PUV must be a list of booleans")

    return DecideInput(
        num_points=num_points,
        points=_parse_points(record["POINTS"]),
        parameters=_parse_parameters(record.get("PARAMETERS")),
        lcm=_parse_lcm(record["LCM"]),
        puv=tuple(puv),
    )


def _read_text(path: Union[str, Path]) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise RecordFormatError(f"File is not valid UTF-8: {e}")


def loads_input(text: str) -> DecideInput:
    try:
        record = json.loads(text)
    except ValueError as e:
        raise RecordFormatError(f"Invalid JSON: {e}")
    return parse_input_record(record)


def read_input_file(path: Union[str, Path]) -> DecideInput:
    return loads_input(_read_text(path))


def input_to_record(snapshot: DecideInput) -> dict:
    """Input snapshot in the wire layout, using the clean connector tags."""
    return {
        "NUMPOINTS": snapshot.num_points,
        "POINTS": [p.to_pair() for p in snapshot.points],
        "LCM": {
            str(i): [connector.value for connector in row]
            for i, row in enumerate(snapshot.lcm)
        },
        "PUV": list(snapshot.puv),
        "PARAMETERS": snapshot.parameters.to_wire(),
    }


# =============================================================================
# OUTPUT RECORDS
# =============================================================================

def dumps_output(output: DecideOutput) -> str:
    return json.dumps(output.to_record(), indent=2)


def write_output_file(output: DecideOutput, path: Union[str, Path]) -> Path:
    """Write one output record, creating the parent directory if needed."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dumps_output(output), encoding="utf-8")
    return path


def _bool_vector(record: dict, key: str) -> tuple[bool, ...]:
    vector = record.get(key)
    if (
        not isinstance(vector, list)
        or len(vector) != NUM_CONDITIONS
        or not all(isinstance(v, bool) for v in vector)
    ):
        raise RecordFormatError(f"{key} must be a list of {NUM_CONDITIONS} booleans")
    return tuple(vector)


def parse_output_record(record: Any) -> DecideOutput:
    """
    Convert a decoded output record back into a DecideOutput.

    The stored LAUNCH value is kept as written; use
    aggregate_launch(output.fuv) to re-derive it.

    Raises:
        RecordFormatError: If the record does not have the output layout
    """
    if not isinstance(record, dict):
        raise RecordFormatError("Output record must be a JSON object")

    try:
        launch = LaunchDecision(record.get("LAUNCH"))
    except ValueError:
        raise RecordFormatError(f"Invalid LAUNCH value: {record.get('LAUNCH')!r}")

    pum = record.get("PUM")
    if not isinstance(pum, list) or len(pum) != NUM_CONDITIONS:
        raise RecordFormatError(f"PUM must have {NUM_CONDITIONS} rows")

    return DecideOutput(
        launch=launch,
        cmv=_bool_vector(record, "CMV"),
        pum=tuple(_bool_vector({"PUM": row}, "PUM") for row in pum),
        fuv=_bool_vector(record, "FUV"),
    )


def loads_output(text: str) -> DecideOutput:
    try:
        record = json.loads(text)
    except ValueError as e:
        raise RecordFormatError(f"Invalid JSON: {e}")
    return parse_output_record(record)


def read_output_file(path: Union[str, Path]) -> DecideOutput:
    return loads_output(_read_text(path))
