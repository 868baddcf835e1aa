from __future__ import annotations

from falldown.__main__ import main


def test_ascii_demo_prints_one_frame(capsys) -> None:
    main(["--frames", "5", "--seed", "1", "--log-level", "WARNING"])
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 15
    assert all(len(line) == 9 for line in lines[:14])
    assert lines[-1].startswith("Level 1")
