"""Tests for Output helper."""

import json

from disktrend.core.output import Output


class TestOutput:
    """Tests for structured output helper."""

    def test_emit_merges_data(self):
        """Multiple emit() calls merge data."""
        output = Output()
        output.emit({"key1": "value1"})
        output.emit({"key2": "value2"})
        assert output.data == {"key1": "value1", "key2": "value2"}

    def test_line_with_perfdata(self):
        """line joins status, summary and perfdata."""
        output = Output()
        output.set_status("CRITICAL")
        output.set_summary("/: full in 3.50 hours")
        output.set_perfdata("/=3.50 hours")
        assert output.line == "CRITICAL: /: full in 3.50 hours | /=3.50 hours"

    def test_line_without_perfdata(self):
        """No perfdata means no pipe."""
        output = Output()
        output.set_status("OK")
        output.set_summary("all good")
        assert output.line == "OK: all good"

    def test_error_implies_unknown(self):
        """An error with no status renders as UNKNOWN."""
        output = Output()
        output.error("unable to list filesystems")
        assert output.line == "UNKNOWN: unable to list filesystems"

    def test_summary_from_warning(self):
        """summary falls back to the first warning."""
        output = Output()
        output.warning("Disk degraded")
        assert output.summary == "Disk degraded"

    def test_json_document(self):
        """to_json() includes status, summary, perfdata and data."""
        output = Output()
        output.set_status("OK")
        output.set_summary("fine")
        output.emit({"mounts": [{"mountpoint": "/"}]})
        parsed = json.loads(output.to_json())
        assert parsed["status"] == "OK"
        assert parsed["summary"] == "fine"
        assert parsed["perfdata"] == ""
        assert parsed["mounts"][0]["mountpoint"] == "/"
        assert "errors" not in parsed

    def test_json_includes_errors(self):
        """Errors are listed in JSON output."""
        output = Output()
        output.error("bad config")
        parsed = json.loads(output.to_json())
        assert parsed["status"] == "UNKNOWN"
        assert parsed["errors"] == ["bad config"]

    def test_render_prints_once(self, capsys):
        """render() only prints the first time."""
        output = Output()
        output.set_status("OK")
        output.set_summary("fine")
        output.render()
        output.render()
        assert capsys.readouterr().out == "OK: fine\n"
