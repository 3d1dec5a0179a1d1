"""
Unit tests for schema.py
"""

import json

import pytest

from eval_radar_core.schema import (
    BatchLoadError,
    BatchParseError,
    BatchValidationError,
    EvaluationBatch,
    EvaluationMetrics,
    dump_batch_json,
    find_duplicate_ids,
    load_batch,
    parse_batch_text,
    serialize_batch,
    validate_batch,
)

REQUIRED_FIELDS = [
    "id",
    "timestamp",
    "model",
    "prompt_tokens",
    "response_time_ms",
    "status",
    "cost_usd",
    "temperature",
    "max_tokens",
    "prompt_template",
]


def _raw_record(**overrides) -> dict:
    record = {
        "id": "resp_001",
        "timestamp": "2024-03-01T10:00:00Z",
        "model": "gpt-4",
        "prompt_tokens": 150,
        "completion_tokens": 320,
        "total_tokens": 470,
        "response_time_ms": 1830,
        "status": "success",
        "cost_usd": 0.0214,
        "temperature": 0.7,
        "max_tokens": 1000,
        "prompt_template": "Summarize the following article: {article}",
        "output": "The article discusses...",
        "evaluation_metrics": {
            "relevance_score": 8.5,
            "factual_accuracy": 9.0,
            "coherence_score": 8.8,
            "response_quality": 8.7,
        },
        "error": None,
    }
    record.update(overrides)
    return record


def _raw_batch(*records) -> dict:
    return {"responses": list(records)}


class TestValidateBatch:
    """Tests for validate_batch"""

    def test_valid_batch(self):
        batch = validate_batch(_raw_batch(_raw_record(), _raw_record(id="resp_002", model="claude-3")))

        assert isinstance(batch, EvaluationBatch)
        assert len(batch.responses) == 2
        record = batch.responses[0]
        assert record.id == "resp_001"
        assert record.status == "success"
        assert record.evaluation_metrics == EvaluationMetrics(
            relevance_score=8.5,
            factual_accuracy=9.0,
            coherence_score=8.8,
            response_quality=8.7,
        )
        assert batch.responses[1].model == "claude-3"

    def test_empty_responses_is_valid(self):
        batch = validate_batch({"responses": []})
        assert batch.responses == []

    def test_timeout_record_with_error(self):
        raw = _raw_record(
            status="timeout",
            completion_tokens=None,
            total_tokens=None,
            output=None,
            evaluation_metrics=None,
            error={"type": "timeout", "message": "Request timed out after 30s"},
        )
        record = validate_batch(_raw_batch(raw)).responses[0]

        assert record.status == "timeout"
        assert record.evaluation_metrics is None
        assert record.error.type == "timeout"
        assert record.error.message == "Request timed out after 30s"

    def test_absent_and_null_optional_fields_are_identical(self):
        """Missing optional fields and explicit nulls validate to the same record"""
        optional = ["completion_tokens", "total_tokens", "output", "evaluation_metrics", "error"]
        with_nulls = _raw_record(**{name: None for name in optional})
        without = {k: v for k, v in _raw_record().items() if k not in optional}

        a = validate_batch(_raw_batch(with_nulls)).responses[0]
        b = validate_batch(_raw_batch(without)).responses[0]

        assert a == b
        for name in optional:
            assert getattr(b, name) is None

    @pytest.mark.parametrize("field_name", REQUIRED_FIELDS)
    def test_missing_required_field_rejected(self, field_name):
        raw = _raw_record()
        del raw[field_name]

        with pytest.raises(BatchValidationError) as excinfo:
            validate_batch(_raw_batch(raw))

        locations = [issue.location for issue in excinfo.value.issues]
        assert f"responses.0.{field_name}" in locations

    def test_invalid_status_rejected(self):
        with pytest.raises(BatchValidationError) as excinfo:
            validate_batch(_raw_batch(_raw_record(status="failed")))

        issue = excinfo.value.issues[0]
        assert issue.location == "responses.0.status"
        assert "success" in issue.message
        assert "timeout" in issue.message

    def test_status_is_case_sensitive(self):
        with pytest.raises(BatchValidationError):
            validate_batch(_raw_batch(_raw_record(status="Success")))

    def test_numeric_string_not_coerced(self):
        with pytest.raises(BatchValidationError) as excinfo:
            validate_batch(_raw_batch(_raw_record(prompt_tokens="150")))
        assert excinfo.value.issues[0].location == "responses.0.prompt_tokens"

    def test_bool_not_accepted_as_number(self):
        with pytest.raises(BatchValidationError):
            validate_batch(_raw_batch(_raw_record(cost_usd=True)))

    def test_number_not_accepted_as_string(self):
        with pytest.raises(BatchValidationError):
            validate_batch(_raw_batch(_raw_record(model=4)))

    def test_integer_accepted_for_numeric_fields(self):
        record = validate_batch(_raw_batch(_raw_record(temperature=1, cost_usd=0))).responses[0]
        assert record.temperature == 1
        assert record.cost_usd == 0

    def test_integer_beyond_float_range_rejected(self):
        with pytest.raises(BatchValidationError) as excinfo:
            validate_batch(_raw_batch(_raw_record(prompt_tokens=10 ** 400)))
        assert excinfo.value.issues[0].location == "responses.0.prompt_tokens"

    def test_nan_metric_rejected(self):
        metrics = {
            "relevance_score": float("nan"),
            "factual_accuracy": 9.0,
            "coherence_score": 8.8,
            "response_quality": 8.7,
        }
        with pytest.raises(BatchValidationError):
            validate_batch(_raw_batch(_raw_record(evaluation_metrics=metrics)))

    def test_incomplete_metrics_reject_record(self):
        metrics = {"relevance_score": 8.5, "factual_accuracy": 9.0, "coherence_score": 8.8}
        with pytest.raises(BatchValidationError) as excinfo:
            validate_batch(_raw_batch(_raw_record(evaluation_metrics=metrics)))

        locations = [issue.location for issue in excinfo.value.issues]
        assert "responses.0.evaluation_metrics.response_quality" in locations

    def test_non_numeric_metric_rejected(self):
        metrics = {
            "relevance_score": "high",
            "factual_accuracy": 9.0,
            "coherence_score": 8.8,
            "response_quality": 8.7,
        }
        with pytest.raises(BatchValidationError):
            validate_batch(_raw_batch(_raw_record(evaluation_metrics=metrics)))

    def test_incomplete_error_object_rejected(self):
        with pytest.raises(BatchValidationError):
            validate_batch(_raw_batch(_raw_record(error={"type": "timeout"})))

    def test_one_bad_record_rejects_whole_batch(self):
        bad = _raw_record(id="resp_002")
        del bad["status"]

        with pytest.raises(BatchValidationError) as excinfo:
            validate_batch(_raw_batch(_raw_record(), bad, _raw_record(id="resp_003")))

        assert [issue.location for issue in excinfo.value.issues] == ["responses.1.status"]

    def test_all_issues_are_reported(self):
        first = _raw_record(status="unknown")
        second = _raw_record(id="resp_002")
        del second["model"]

        with pytest.raises(BatchValidationError) as excinfo:
            validate_batch(_raw_batch(first, second))

        error = excinfo.value
        locations = {issue.location for issue in error.issues}
        assert locations == {"responses.0.status", "responses.1.model"}
        message = str(error)
        assert "2 issues" in message
        assert "responses.0.status" in message
        assert "responses.1.model" in message

    def test_top_level_must_be_object(self):
        with pytest.raises(BatchValidationError) as excinfo:
            validate_batch([_raw_record()])
        assert excinfo.value.issues[0].location == "<root>"

    def test_missing_responses_key(self):
        with pytest.raises(BatchValidationError) as excinfo:
            validate_batch({"items": []})
        assert excinfo.value.issues[0].location == "responses"

    def test_unknown_fields_ignored(self):
        record = validate_batch(_raw_batch(_raw_record(region="us-east-1"))).responses[0]
        assert not hasattr(record, "region")


class TestParseBatchText:
    """Tests for parse_batch_text and load_batch"""

    def test_parse_valid_text(self):
        batch = parse_batch_text(json.dumps(_raw_batch(_raw_record())))
        assert len(batch.responses) == 1

    def test_malformed_json_raises_parse_error(self):
        with pytest.raises(BatchParseError) as excinfo:
            parse_batch_text('{"responses": [\n  {"id": "resp_001",\n}')

        assert excinfo.value.line is not None
        assert "Could not parse JSON" in str(excinfo.value)

    def test_empty_text_is_parse_error(self):
        with pytest.raises(BatchParseError):
            parse_batch_text("")

    def test_valid_json_wrong_shape_is_validation_error(self):
        with pytest.raises(BatchValidationError):
            parse_batch_text('{"responses": "none"}')

    def test_deeply_nested_document_is_parse_error(self):
        with pytest.raises(BatchParseError, match="nested too deeply"):
            parse_batch_text("[" * 200000)

    def test_oversized_integer_literal_is_rejected(self):
        with pytest.raises(BatchLoadError):
            parse_batch_text('{"responses": [' + "9" * 5000 + "]}")

    def test_load_batch_from_file(self, tmp_path):
        path = tmp_path / "batch.json"
        path.write_text(json.dumps(_raw_batch(_raw_record())), encoding="utf-8")

        batch = load_batch(path)
        assert batch.responses[0].id == "resp_001"

    def test_load_batch_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_batch(tmp_path / "missing.json")


class TestSerializeBatch:
    """Tests for serialize_batch / dump_batch_json"""

    def test_round_trip(self):
        raw = _raw_batch(
            _raw_record(),
            {k: v for k, v in _raw_record(id="resp_002").items() if k != "output"},
            _raw_record(id="resp_003", status="timeout", evaluation_metrics=None,
                        error={"type": "timeout", "message": "Timed out"}),
        )
        batch = validate_batch(raw)

        assert validate_batch(serialize_batch(batch)) == batch
        assert parse_batch_text(dump_batch_json(batch)) == batch

    def test_absent_fields_serialize_as_null(self):
        raw = {k: v for k, v in _raw_record().items() if k != "output"}
        data = serialize_batch(validate_batch(_raw_batch(raw)))

        assert data["responses"][0]["output"] is None

    def test_integers_stay_integers(self):
        data = serialize_batch(validate_batch(_raw_batch(_raw_record())))
        record = data["responses"][0]

        for field_name in ("prompt_tokens", "completion_tokens", "total_tokens", "response_time_ms", "max_tokens"):
            assert type(record[field_name]) is int, field_name
        assert record["prompt_tokens"] == 150
        assert type(record["cost_usd"]) is float
        assert '"max_tokens": 1000,' in dump_batch_json(validate_batch(_raw_batch(_raw_record())))


class TestFindDuplicateIds:
    """Tests for find_duplicate_ids"""

    def test_no_duplicates(self):
        batch = validate_batch(_raw_batch(_raw_record(id="a"), _raw_record(id="b")))
        assert find_duplicate_ids(batch) == []

    def test_duplicates_in_first_seen_order(self):
        batch = validate_batch(_raw_batch(
            _raw_record(id="b"),
            _raw_record(id="a"),
            _raw_record(id="b"),
            _raw_record(id="a"),
            _raw_record(id="c"),
        ))
        assert find_duplicate_ids(batch) == ["b", "a"]
