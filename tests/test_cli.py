"""
Tests for the command line entry point.
"""
import json

from csv_localize.main import main, EXIT_OK, EXIT_WARNINGS, EXIT_ERROR


def test_extract_writes_file(tmp_path, capsys):
    src = tmp_path / "src"
    src.mkdir()
    (src / "app.py").write_text('L("menu.open")\n', encoding="utf-8")

    code = main(["extract", str(src), "-o", str(tmp_path), "-l", "en,de"])

    out = tmp_path / "Localization.csv"
    assert code == EXIT_OK
    assert out.read_text(encoding="utf-8") == "key,en,de\nmenu.open,,\n"
    captured = capsys.readouterr()
    assert "1 key, 1 added, 0 removed, 1 file scanned" in captured.out
    assert "Missing translations for key 'menu.open'" in captured.err


def test_extract_custom_name_and_function(tmp_path):
    src = tmp_path / "src"
    src.mkdir()
    (src / "ui.py").write_text('tr("a")\nL("b")\n', encoding="utf-8")

    code = main(["extract", str(src), "-o", str(tmp_path), "-n", "Strings.csv", "-s", "tr"])

    assert code == EXIT_OK
    assert (tmp_path / "Strings.csv").read_text(encoding="utf-8") == "key,en\na,\n"


def test_extract_missing_path_keeps_file(tmp_path, capsys):
    out = tmp_path / "Localization.csv"
    out.write_text("key,en\nhello,Hello\n", encoding="utf-8")

    code = main(["extract", str(tmp_path / "typo_dir"), "-o", str(tmp_path), "-c"])

    assert code == EXIT_ERROR
    assert "Source path not found" in capsys.readouterr().err
    assert out.read_text(encoding="utf-8") == "key,en\nhello,Hello\n"


def test_extract_languages_from_config_file(tmp_path):
    src = tmp_path / "src"
    src.mkdir()
    (src / "app.py").write_text('L("menu.open")\n', encoding="utf-8")
    cfg_path = tmp_path / "config.json"
    cfg_path.write_text(json.dumps({"languages": ["en", "fr"]}), encoding="utf-8")

    code = main(["--config", str(cfg_path), "extract", str(src), "-o", str(tmp_path)])

    assert code == EXIT_OK
    assert (tmp_path / "Localization.csv").read_text(encoding="utf-8") == "key,en,fr\nmenu.open,,\n"


def test_extract_language_flag_overrides_config(tmp_path):
    src = tmp_path / "src"
    src.mkdir()
    (src / "app.py").write_text('L("a")\n', encoding="utf-8")
    cfg_path = tmp_path / "config.json"
    cfg_path.write_text(json.dumps({"languages": ["en", "fr"]}), encoding="utf-8")

    main(["--config", str(cfg_path), "extract", str(src), "-o", str(tmp_path), "-l", "de"])

    assert (tmp_path / "Localization.csv").read_text(encoding="utf-8") == "key,de\na,\n"


def test_check_incomplete(sample_csv, capsys):
    assert main(["check", sample_csv]) == EXIT_WARNINGS
    captured = capsys.readouterr()
    assert f"{sample_csv}:3: warning: Missing translation for key 'bye' for language es" in captured.err
    assert "2 keys, en, es, 1 key incomplete" in captured.out


def test_check_complete(write_csv):
    path = write_csv("key,en\nhello,Hello\n")
    assert main(["check", path]) == EXIT_OK


def test_check_missing_file(tmp_path, capsys):
    assert main(["check", str(tmp_path / "nope.csv")]) == EXIT_ERROR
    assert "file not found" in capsys.readouterr().err


def test_check_malformed_file(write_csv, capsys):
    path = write_csv("key,en\na,1\na,2\n")
    assert main(["check", path]) == EXIT_ERROR
    assert "duplicate key 'a'" in capsys.readouterr().err


def test_lookup(sample_csv, capsys):
    code = main(["lookup", "hello", "bye", "missing", "-f", sample_csv, "--lang", "es"])
    assert code == EXIT_OK
    assert capsys.readouterr().out.splitlines() == ["Hola", "Bye", "missing"]


def test_lookup_without_fallback(sample_csv, capsys):
    main(["lookup", "bye", "-f", sample_csv, "--lang", "es", "--no-fallback"])
    assert capsys.readouterr().out.splitlines() == ["bye"]


def test_lookup_uses_environment(sample_csv, monkeypatch, capsys):
    monkeypatch.setenv("CSV_LOCALIZE_FILE", sample_csv)
    monkeypatch.setenv("LANG", "es_ES.UTF-8")
    main(["lookup", "hello"])
    assert capsys.readouterr().out.splitlines() == ["Hola"]


def test_lookup_unreadable_source(tmp_path, capsys):
    code = main(["lookup", "hello", "-f", str(tmp_path / "nope.csv")])
    assert code == EXIT_ERROR
    assert "Error: Cannot read translation file" in capsys.readouterr().err


def test_config_file(sample_csv, tmp_path, capsys):
    cfg_path = tmp_path / "config.json"
    cfg_path.write_text(json.dumps({"source": sample_csv, "language": "es"}), encoding="utf-8")
    main(["--config", str(cfg_path), "lookup", "hello"])
    assert capsys.readouterr().out.splitlines() == ["Hola"]


def test_serve_runs_uvicorn(monkeypatch):
    import uvicorn

    calls = []
    monkeypatch.setattr(uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))
    assert main(["serve", "--port", "9000"]) == EXIT_OK
    assert calls == [("web.server:app", {"host": "127.0.0.1", "port": 9000, "log_level": "info"})]
