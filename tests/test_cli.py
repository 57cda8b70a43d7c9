import json

import pytest

from unconfuse.cli import build_config, build_parser, main

from conftest import FINGERPRINT_LEVEL_2


def run(argv):
    """Run the CLI, returning the exit code (0 when main returns normally)"""
    try:
        main(argv)
    except SystemExit as e:
        return e.code
    return 0


@pytest.fixture
def obfuscated_file(tmp_path, level2_source):
    path = tmp_path / "obfuscated.js"
    path.write_text(level2_source, encoding='utf-8')
    return path


def test_decode_file(obfuscated_file, capsys):
    assert run(['-i', str(obfuscated_file), '--no-color']) == 0
    out = capsys.readouterr().out
    assert "[*] Decoding strings in: obfuscated.js" in out
    assert "-> 'Hello World!'" in out
    assert "-> 'ABC'" in out
    assert "3 of 3 literals resolved" in out


def test_decode_file_json(obfuscated_file, capsys):
    assert run(['-i', str(obfuscated_file), '--json']) == 0
    data = json.loads(capsys.readouterr().out)
    assert data['metadata']['level'] == 2
    assert [r['plaintext'] for r in data['results']] == ['Hello World!', 'ABC', 'Hello']


def test_unsupported_input_exit_code(tmp_path, capsys):
    path = tmp_path / "plain.js"
    path.write_text("var a = ['<~87cURD]~>', 'x'];", encoding='utf-8')
    assert run(['-i', str(path), '--no-color']) == 2
    assert "not obfuscated by the supported tool" in capsys.readouterr().out


def test_missing_file(tmp_path, capsys):
    assert run(['-i', str(tmp_path / "missing.js")]) == 1
    assert "Input file not found" in capsys.readouterr().err


def test_no_input(capsys):
    assert run([]) == 1
    assert "You need to provide an input file" in capsys.readouterr().err


def test_license(capsys):
    assert run(['-l']) == 0
    assert "MIT License" in capsys.readouterr().out


def test_decode_string(capsys):
    assert run(['-d', '<~87cURD]~>', '--no-color']) == 0
    out = capsys.readouterr().out
    assert "'<~87cURD]~>' -> (score : 9.7500) -> 'Hello'" in out


def test_decode_string_level1(capsys):
    assert run(['-d', '#G(I', '--level', '1', '--json']) == 0
    data = json.loads(capsys.readouterr().out)
    assert data['results'][0]['codec'] == 'base91'
    assert data['results'][0]['plaintext'] == 'abc'


def test_invalid_level(capsys):
    assert run(['-d', 'abc', '--level', '0']) == 1
    assert "Level must be at least 1" in capsys.readouterr().err


def test_unknown_preset_rejected_by_parser(capsys):
    assert run(['-d', 'abc', '--preset', 'nope']) == 2


def test_markdown_report(obfuscated_file, tmp_path, capsys):
    report_path = tmp_path / "report.md"
    assert run(['-i', str(obfuscated_file), '--report', str(report_path), '--no-color']) == 0
    assert f"[+] Markdown report: {report_path}" in capsys.readouterr().out
    text = report_path.read_text(encoding='utf-8')
    assert text.startswith("# Unconfuse Report: obfuscated.js")
    assert "Hello World!" in text


def test_build_config_from_arguments():
    args = build_parser().parse_args(['-d', 'x', '--preset', 'strict', '--scoring', 'shannon', '--workers', '3'])
    config = build_config(args)
    assert config.scoring == 'shannon'
    assert config.min_length == 4
    assert config.max_workers == 3

    args = build_parser().parse_args(['-d', 'x', '--ceiling', '12.5'])
    assert build_config(args).plausibility_ceiling == 12.5


def test_input_and_decode_are_exclusive(capsys):
    assert run(['-i', 'a.js', '-d', 'abc']) == 2


def test_fingerprint_fixture_is_level_two(tmp_path, capsys):
    path = tmp_path / "empty.js"
    path.write_text(FINGERPRINT_LEVEL_2, encoding='utf-8')
    assert run(['-i', str(path), '--no-color']) == 0
    assert "0 of 0 literals resolved (level 2, 0 malformed)" in capsys.readouterr().out
