"""Tests for the jsx-insert command-line interface."""

import json
from unittest.mock import patch

import pytest

from jsx_element_inserter.cli.main import (
    EXIT_ERROR,
    EXIT_NO_MATCH,
    EXIT_OK,
    create_argument_parser,
    main,
)

SOURCE = '<main>\n  <ul id="list">\n    <li>a</li>\n  </ul>\n</main>'


@pytest.fixture
def source_file(tmp_path):
    """Write the sample source to a temporary file."""
    path = tmp_path / "App.jsx"
    path.write_text(SOURCE, encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def no_logging_setup():
    """Keep the CLI from replacing the root logging handlers."""
    with patch("jsx_element_inserter.cli.main.configure_logging") as mocked:
        yield mocked


class TestArgumentParser:
    """Test argument parsing."""

    def test_content_option_required(self, source_file) -> None:
        """Test one of --code, --tag or --request is required."""
        with pytest.raises(SystemExit):
            create_argument_parser().parse_args([str(source_file)])

    def test_position_options_exclusive(self, source_file) -> None:
        """Test only one position option may be given."""
        with pytest.raises(SystemExit):
            create_argument_parser().parse_args(
                [str(source_file), "--tag", "li", "--prepend", "--index", "1"]
            )


class TestMain:
    """Test main() end to end."""

    def test_code_block_into_root(self, source_file, capsys) -> None:
        """Test the default target is the first element."""
        exit_code = main([str(source_file), "--code", "<footer />"])

        assert exit_code == EXIT_OK
        assert capsys.readouterr().out == (
            '<main>\n  <ul id="list">\n    <li>a</li>\n  </ul>\n<footer /></main>\n'
        )

    def test_tag_with_attributes_and_index(self, source_file, capsys) -> None:
        """Test building an element from options at a logical index."""
        exit_code = main([
            str(source_file),
            "--target-tag", "ul",
            "--tag", "li",
            "--attr", "className=first",
            "--json-attr", "data={\"n\":1}",
            "--text", "z",
            "--index", "0",
        ])

        out = capsys.readouterr().out
        assert exit_code == EXIT_OK
        assert '<li className="first" data={"{\\"n\\":1}"}>z</li><li>a</li>' in out

    def test_target_attr(self, source_file, capsys) -> None:
        """Test targeting by attribute value."""
        exit_code = main([
            str(source_file), "--target-attr", "id=list", "--code", "<li>b</li>",
        ])

        assert exit_code == EXIT_OK
        assert "<li>a</li>\n  <li>b</li></ul>" in capsys.readouterr().out

    def test_json_format(self, source_file, capsys) -> None:
        """Test the JSON report holds source and result summary."""
        exit_code = main([
            str(source_file), "--target-tag", "ul", "--code", "<li />",
            "--index", "-1", "--format", "json",
        ])

        report = json.loads(capsys.readouterr().out)
        assert exit_code == EXIT_OK
        assert report["source"].endswith("<li /></ul>\n</main>")
        assert report["result"]["degraded"] is True
        assert report["result"]["diagnostics"][0]["message"] == "Invalid index: -1"

    def test_request_file(self, source_file, tmp_path, capsys) -> None:
        """Test loading an insertion request from JSON."""
        request_path = tmp_path / "request.json"
        request_path.write_text(json.dumps({
            "tagName": "li",
            "textContent": "first",
            "location": {"position": "prepend"},
        }), encoding="utf-8")

        exit_code = main([
            str(source_file), "--target-tag", "ul", "--request", str(request_path),
        ])

        assert exit_code == EXIT_OK
        assert '<ul id="list"><li>first</li>' in capsys.readouterr().out

    def test_position_option_overrides_request_location(
        self, source_file, tmp_path, capsys
    ) -> None:
        """Test command-line position wins over the request file."""
        request_path = tmp_path / "request.json"
        request_path.write_text(json.dumps({
            "codeBlock": "<li>last</li>",
            "location": {"position": "prepend"},
        }), encoding="utf-8")

        main([
            str(source_file), "--target-tag", "ul",
            "--request", str(request_path), "--append",
        ])

        assert "<li>a</li>\n  <li>last</li></ul>" in capsys.readouterr().out

    def test_output_file(self, source_file, tmp_path, capsys) -> None:
        """Test writing the result to a file."""
        output_path = tmp_path / "out.jsx"

        exit_code = main([
            str(source_file), "--code", "<hr />", "--output", str(output_path),
        ])

        assert exit_code == EXIT_OK
        assert capsys.readouterr().out == ""
        assert output_path.read_text(encoding="utf-8").endswith("<hr /></main>\n")

    def test_no_match(self, source_file, capsys) -> None:
        """Test exit code 1 when no element matches."""
        exit_code = main([str(source_file), "--target-tag", "table", "--code", "<tr />"])

        assert exit_code == EXIT_NO_MATCH
        assert "no element matched" in capsys.readouterr().err

    @pytest.mark.parametrize("extra_args", [
        ["--code", "<li>"],
        ["--tag", "li", "--attr", "novalue"],
        ["--tag", "li", "--json-attr", "data={bad"],
        ["--tag", "li", "--json-attr", "data=NaN"],
    ])
    def test_errors(self, source_file, capsys, extra_args) -> None:
        """Test invalid input gives exit code 2 and a message."""
        exit_code = main([str(source_file)] + extra_args)

        assert exit_code == EXIT_ERROR
        assert capsys.readouterr().err.startswith("Error:")

    def test_fragment_source_targets_fragment(self, tmp_path, capsys) -> None:
        """Test the default target is a fragment root, not its first child."""
        path = tmp_path / "List.jsx"
        path.write_text("<><li>a</li></>", encoding="utf-8")

        exit_code = main([str(path), "--code", "<li>b</li>"])

        assert exit_code == EXIT_OK
        assert capsys.readouterr().out == "<><li>a</li><li>b</li></>\n"

    def test_request_with_non_string_text(self, source_file, tmp_path, capsys) -> None:
        """Test a request whose textContent is not a string is rejected."""
        request_path = tmp_path / "request.json"
        request_path.write_text(
            json.dumps({"tagName": "p", "textContent": 5}), encoding="utf-8"
        )

        exit_code = main([str(source_file), "--request", str(request_path)])

        assert exit_code == EXIT_ERROR
        assert "text content must be a string" in capsys.readouterr().err

    def test_missing_source_file(self, tmp_path, capsys) -> None:
        """Test unreadable sources are reported."""
        exit_code = main([str(tmp_path / "missing.jsx"), "--code", "<p />"])

        assert exit_code == EXIT_ERROR
        assert "Could not read" in capsys.readouterr().err

    def test_config_file(self, source_file, tmp_path, no_logging_setup, capsys) -> None:
        """Test a config file sets the logging level and resolver options."""
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({
            "resolver": {"report_clamped_index": True},
            "global_": {"logging_level": "WARNING"},
        }), encoding="utf-8")

        exit_code = main([
            str(source_file), "--config", str(config_path), "--target-tag", "ul",
            "--code", "<li />", "--index", "7", "--format", "json",
        ])

        report = json.loads(capsys.readouterr().out)
        assert exit_code == EXIT_OK
        assert report["result"]["diagnostics"][0]["message"] == "Index 7 clamped to 1"
        no_logging_setup.assert_called_once_with("WARNING")

    def test_invalid_config_file(self, source_file, tmp_path, capsys) -> None:
        """Test invalid configuration gives exit code 2."""
        config_path = tmp_path / "config.json"
        config_path.write_text('{"global_": {"logging_level": "LOUD"}}', encoding="utf-8")

        exit_code = main([str(source_file), "--config", str(config_path), "--code", "<p />"])

        assert exit_code == EXIT_ERROR
        assert "logging_level" in capsys.readouterr().err

    def test_verbosity_flags(self, source_file, no_logging_setup) -> None:
        """Test --verbose and --quiet select the logging level."""
        main([str(source_file), "--code", "<p />", "--verbose"])
        main([str(source_file), "--code", "<p />", "--quiet"])

        assert [call.args[0] for call in no_logging_setup.call_args_list] == ["DEBUG", "ERROR"]
