from __future__ import annotations

import json

from PIL import Image

from chip8.cli import main


def _write_rom(tmp_path, *words: int):
    path = tmp_path / "test.ch8"
    path.write_bytes(b"".join(w.to_bytes(2, "big") for w in words))
    return path


def test_cli_runs_and_prints_frame(tmp_path, capsys) -> None:
    rom = _write_rom(tmp_path, 0xA000, 0xD015, 0x1204)
    assert main([str(rom), "--steps", "10", "--print-frame"]) == 0

    out = capsys.readouterr().out
    assert "10 ticks" in out
    assert "PC=0x204" in out
    lines = out.splitlines()
    assert "####" + "." * 60 in lines
    assert sum(1 for line in lines if len(line) == 64) == 32


def test_cli_saves_png(tmp_path) -> None:
    rom = _write_rom(tmp_path, 0xA000, 0xD015, 0x1204)
    target = tmp_path / "frame.png"
    assert main([str(rom), "--steps", "3", "--save-frame", str(target), "--scale", "2"]) == 0

    with Image.open(target) as image:
        assert image.size == (128, 64)


def test_cli_uses_config_file(tmp_path, capsys) -> None:
    rom = _write_rom(tmp_path, 0xF00A, 0x1202)
    config = tmp_path / "runner.json"
    config.write_text(json.dumps({"name": "Test Rig", "key_map": {"k": "0x9"}}))
    assert main([str(rom), "--steps", "4", "--config", str(config), "--press", "k:1"]) == 0
    assert "Test Rig" in capsys.readouterr().out


def test_cli_reports_missing_rom(tmp_path) -> None:
    assert main([str(tmp_path / "missing.ch8")]) == 1


def test_cli_reports_bad_opcode(tmp_path, caplog) -> None:
    rom = _write_rom(tmp_path, 0x6000, 0xFFFF)
    assert main([str(rom), "--steps", "5"]) == 1
    assert "FFFF" in caplog.text


def test_cli_rejects_bad_press(tmp_path) -> None:
    rom = _write_rom(tmp_path, 0x1200)
    assert main([str(rom), "--press", "nope"]) == 2


def test_cli_rejects_out_of_range_key(tmp_path, caplog) -> None:
    rom = _write_rom(tmp_path, 0x1200)
    assert main([str(rom), "--steps", "2", "--press", "10:0"]) == 2
    assert "0x10" in caplog.text


def test_cli_rejects_bad_scale_before_running(tmp_path, capsys) -> None:
    rom = _write_rom(tmp_path, 0x1200)
    frame = tmp_path / "frame.png"
    assert main([str(rom), "--save-frame", str(frame), "--scale", "0"]) == 2
    assert capsys.readouterr().out == ""
    assert not frame.exists()
