import json

import pytest

import lms.__main__ as entry
from lms.core.config import LMSConfig
from lms.main import LMSPlatform, main


def test_platform_seeds_sample_data() -> None:
    context = LMSPlatform().context
    assert [row.name for row in context.registry.list_courses()] == ["Mathematics", "Physics"]
    assert context.registry.get_course(0).get_contents() == ["Introduction to Algebra", "Advanced Calculus"]
    assert context.directory.authenticate("teacher2@example.com", "teacherpass").username == "teacher2"


def test_platform_without_seed_data() -> None:
    context = LMSPlatform(LMSConfig(seed_sample_data=False)).context
    assert context.registry.is_empty()
    assert len(context.directory) == 0


def test_main_runs_console(monkeypatch) -> None:
    calls = []
    monkeypatch.setattr(LMSPlatform, "run_console", lambda self: calls.append(self) or 0)
    assert main([]) == 0
    assert len(calls) == 1


def test_main_serves(monkeypatch) -> None:
    calls = []
    monkeypatch.setattr(LMSPlatform, "start_rest_server", lambda self, host, port: calls.append((host, port)))
    assert main(["--serve", "--port", "9001", "--log-level", "info"]) == 0
    assert calls == [("127.0.0.1", 9001)]


def test_main_reports_bad_config(tmp_path, capsys) -> None:
    path = tmp_path / "lms.json"
    path.write_text(json.dumps({'max_prompt_attempts': -1}))
    assert main(["--config", str(path)]) == 1
    assert "Fatal error" in capsys.readouterr().err


def test_module_entrypoint(monkeypatch) -> None:
    monkeypatch.setattr(entry, "main_entry", lambda: 0)
    with pytest.raises(SystemExit) as excinfo:
        entry.main()
    assert excinfo.value.code == 0


def test_demo_scenario(capsys) -> None:
    from demo.demo_scenario import run_demo

    platform = run_demo()
    out = capsys.readouterr().out
    assert "Student with this email already exists. Cannot create a duplicate account." in out
    assert "Teacher is already assigned to another course." in out
    assert "You are already enrolled in this course." in out
    assert ("s1@example.com", 95) in platform.context.registry.get_course(0).get_grades()
