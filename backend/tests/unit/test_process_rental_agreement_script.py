"""Unit tests for the process_rental_agreement command line script"""

import importlib.util
import json
from pathlib import Path

import pytest

from fixtures.rental_agreements import STANDARD_V1_TEXT

SCRIPT = Path(__file__).parent.parent.parent / "scripts" / "process_rental_agreement.py"


@pytest.fixture(scope="module")
def script():
    spec = importlib.util.spec_from_file_location("process_rental_agreement", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture(autouse=True)
def restore_root_logger():
    import logging
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


class TestScript:
    """Test the CLI entry point"""

    def test_text_document_printed_as_json(self, script, tmp_path, capsys):
        path = tmp_path / "agreement.txt"
        path.write_text(STANDARD_V1_TEXT, encoding="utf-8")

        exit_code = script.main([str(path), "--log-level", "ERROR"])

        assert exit_code == 0
        output = json.loads(capsys.readouterr().out)
        assert output["data"]["raNumber"] == "12345678"
        assert "per_field_results" not in output

    def test_text_flag(self, script, tmp_path, capsys):
        path = tmp_path / "agreement.ocr"
        path.write_text(STANDARD_V1_TEXT, encoding="utf-8")

        exit_code = script.main([str(path), "--text", "--log-level", "ERROR"])

        assert exit_code == 0
        assert json.loads(capsys.readouterr().out)["template_id"] == "standard_rental_agreement"

    def test_text_flag_undecodable_file(self, script, tmp_path, capsys):
        path = tmp_path / "agreement.ocr"
        path.write_bytes(b"RENTAL AGREEMENT NUMBER 12345678\n\xff\xfe")

        exit_code = script.main([str(path), "--text", "--log-level", "ERROR"])

        assert exit_code == 1
        assert "ERROR" in capsys.readouterr().err

    def test_failure_exit_code(self, script, tmp_path, capsys):
        exit_code = script.main([str(tmp_path / "missing.pdf"), "--log-level", "ERROR"])

        assert exit_code == 1
        assert "ERROR" in capsys.readouterr().err

    def test_list_templates(self, script, tmp_path, capsys):
        exit_code = script.main(["--list-templates", "--log-level", "ERROR"])

        assert exit_code == 0
        assert capsys.readouterr().out.split() == ["standard_rental_agreement", "budget_rental_agreement"]

    def test_missing_path_is_usage_error(self, script, capsys):
        with pytest.raises(SystemExit) as exc_info:
            script.main(["--log-level", "ERROR"])

        assert exc_info.value.code == 2
        assert "path" in capsys.readouterr().err
