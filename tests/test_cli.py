import json

import pytest
import srsly
import typer
from typer.testing import CliRunner

from rangekit.cli import _parse_bounds, _parse_range, app

runner = CliRunner()


def _json_output(result) -> object:
    assert result.exit_code == 0, result.output
    return json.loads(result.stdout.strip())


class TestParsing:
    def test_parse_bounds_allows_descending(self) -> None:
        assert _parse_bounds("5,1") == (5, 1)
        assert _parse_bounds(" -3 , 8 ") == (-3, 8)

    @pytest.mark.parametrize("value", ["5", "1,2,3", ",4", "a,b", "1.5,2"])
    def test_parse_bounds_rejects_malformed(self, value: str) -> None:
        with pytest.raises(typer.BadParameter, match="FIRST,LAST"):
            _parse_bounds(value)

    def test_parse_range_requires_ascending(self) -> None:
        assert _parse_range("1,5") == (1, 5)
        assert _parse_range(None) is None
        with pytest.raises(typer.BadParameter, match="low must be <= high"):
            _parse_range("5,1")


class TestOperationCommands:
    @pytest.mark.parametrize(
        ("args", "expected"),
        [
            (["congruent", "1,4", "4,1"], True),
            (["congruent", "1,4", "1,5"], False),
            (["contiguous", "1,4", "5,8"], True),
            (["contiguous", "4,4", "4,4"], False),
            (["overlaps", "2,4", "4,2"], True),
            (["intersection", "1,5", "4,8"], [4, 5]),
            (["intersection", "1,4", "6,8"], None),
            (["union", "1,1", "2,2"], [1, 2]),
            (["union", "1,4", "6,8"], None),
            (["reverse", "1,5"], [5, 1]),
            (["sort", "5,1"], [1, 5]),
            (["sort", "5,1", "--order", "descending"], [5, 1]),
            (["sort", "1,5", "--order", "descending"], [5, 1]),
            (["contains", "5,1", "3"], True),
            (["contains", "5,1", "9"], False),
        ],
    )
    def test_prints_json_result(self, args: list[str], expected) -> None:
        result = runner.invoke(app, args)
        assert _json_output(result) == expected

    def test_negative_bounds_after_double_dash(self) -> None:
        result = runner.invoke(app, ["intersection", "--", "-1,4", "-3,3"])
        assert _json_output(result) == [-1, 3]

    def test_unknown_order_is_rejected(self) -> None:
        result = runner.invoke(app, ["sort", "1,5", "--order", "asc"])
        assert result.exit_code != 0

    def test_malformed_range_is_rejected(self) -> None:
        result = runner.invoke(app, ["reverse", "1,2,3"])
        assert result.exit_code != 0

    def test_verbose_flag_is_accepted(self) -> None:
        result = runner.invoke(app, ["--verbose", "reverse", "1,5"])
        assert _json_output(result) == [5, 1]


class TestGenerate:
    def test_writes_jsonl_queries(self, tmp_path) -> None:
        output = tmp_path / "queries.jsonl"
        result = runner.invoke(
            app, ["generate", "-o", str(output), "--seed", "42"]
        )
        assert result.exit_code == 0, result.output
        rows = list(srsly.read_jsonl(output))
        assert rows
        assert {row["operation"] for row in rows} >= {"union", "sort"}
        assert all("output" in row for row in rows)
        assert f"Generated {len(rows)} queries" in result.output

    def test_seed_is_deterministic(self, tmp_path) -> None:
        first = tmp_path / "a.jsonl"
        second = tmp_path / "b.jsonl"
        for path in (first, second):
            result = runner.invoke(
                app, ["generate", "-o", str(path), "-s", "7"]
            )
            assert result.exit_code == 0, result.output
        assert first.read_text() == second.read_text()

    def test_honors_endpoint_range(self, tmp_path) -> None:
        output = tmp_path / "queries.jsonl"
        result = runner.invoke(
            app,
            [
                "generate",
                "-o",
                str(output),
                "--seed",
                "1",
                "--endpoint-range",
                "0,3",
            ],
        )
        assert result.exit_code == 0, result.output
        for row in srsly.read_jsonl(output):
            for first, last in row["ranges"]:
                assert 0 <= first <= 3
                assert 0 <= last <= 3

    def test_rejects_inverted_endpoint_range(self, tmp_path) -> None:
        output = tmp_path / "queries.jsonl"
        result = runner.invoke(
            app, ["generate", "-o", str(output), "--endpoint-range", "3,0"]
        )
        assert result.exit_code != 0
        assert not output.exists()

    def test_rejects_empty_endpoint_range(self, tmp_path) -> None:
        output = tmp_path / "queries.jsonl"
        result = runner.invoke(
            app, ["generate", "-o", str(output), "--endpoint-range", ""]
        )
        assert result.exit_code != 0
        assert not output.exists()

    def test_output_io_error_has_clean_message(self, tmp_path) -> None:
        output = tmp_path / "missing" / "queries.jsonl"
        result = runner.invoke(app, ["generate", "-o", str(output)])
        assert result.exit_code == 1
        assert "Error: cannot write" in result.output


class TestEvaluate:
    def test_round_trips_generated_queries(self, tmp_path) -> None:
        generated = tmp_path / "queries.jsonl"
        evaluated = tmp_path / "results.jsonl"
        runner.invoke(app, ["generate", "-o", str(generated), "-s", "3"])
        result = runner.invoke(
            app, ["evaluate", str(generated), "-o", str(evaluated)]
        )
        assert result.exit_code == 0, result.output
        assert list(srsly.read_jsonl(evaluated)) == list(
            srsly.read_jsonl(generated)
        )

    def test_prints_results_to_stdout(self, tmp_path) -> None:
        input_file = tmp_path / "in.jsonl"
        srsly.write_jsonl(
            input_file,
            [
                {"operation": "union", "ranges": [[1, 3], [4, 6]]},
                {"operation": "intersection", "ranges": [[1, 4], [6, 8]]},
            ],
        )
        result = runner.invoke(app, ["evaluate", str(input_file)])
        assert result.exit_code == 0, result.output
        lines = [json.loads(line) for line in result.stdout.splitlines()]
        assert [line["output"] for line in lines] == [[1, 6], None]

    def test_skips_blank_lines(self, tmp_path) -> None:
        input_file = tmp_path / "in.jsonl"
        input_file.write_text(
            '\n{"operation": "reverse", "ranges": [[1, 2]]}\n\n',
            encoding="utf-8",
        )
        result = runner.invoke(app, ["evaluate", str(input_file)])
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["output"] == [2, 1]

    @pytest.mark.parametrize(
        ("line", "reason"),
        [
            ("{not json", "malformed JSON"),
            ("[1, 2]", "expected a JSON object"),
            ('{"operation": "union", "ranges": [[1, 2]]}', "invalid query"),
            ('{"operation": "sort", "ranges": [[1, 2, 3, 4]]}', "invalid"),
        ],
    )
    def test_reports_bad_row_line_number(
        self, tmp_path, line: str, reason: str
    ) -> None:
        input_file = tmp_path / "in.jsonl"
        input_file.write_text(
            '{"operation": "reverse", "ranges": [[1, 2]]}\n' + line + "\n",
            encoding="utf-8",
        )
        result = runner.invoke(app, ["evaluate", str(input_file)])
        assert result.exit_code == 1
        assert "Error: line 2:" in result.output
        assert reason in result.output

    def test_missing_input_file(self, tmp_path) -> None:
        result = runner.invoke(app, ["evaluate", str(tmp_path / "nope.jsonl")])
        assert result.exit_code == 1
        assert "input file not found" in result.output

    def test_rejects_misspelled_option(self, tmp_path) -> None:
        input_file = tmp_path / "in.jsonl"
        input_file.write_text(
            '{"operation": "sort", "ranges": [[1, 5]], "oder": "descending"}\n',
            encoding="utf-8",
        )
        result = runner.invoke(app, ["evaluate", str(input_file)])
        assert result.exit_code == 1
        assert "Error: line 1: invalid query" in result.output

    def test_recomputes_stale_output(self, tmp_path) -> None:
        input_file = tmp_path / "in.jsonl"
        srsly.write_jsonl(
            input_file,
            [{"operation": "reverse", "ranges": [[1, 2]], "output": [1, 2]}],
        )
        result = runner.invoke(app, ["evaluate", str(input_file)])
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["output"] == [2, 1]

    def test_reports_invalid_utf8_line(self, tmp_path) -> None:
        input_file = tmp_path / "in.jsonl"
        input_file.write_bytes(
            b'{"operation": "reverse", "ranges": [[1, 2]]}\n'
            b'\xff\xfe{"operation": "reverse", "ranges": [[1, 2]]}\n'
        )
        result = runner.invoke(app, ["evaluate", str(input_file)])
        assert result.exit_code == 1
        assert "Error: line 2: invalid UTF-8" in result.output
