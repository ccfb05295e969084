import json
import sys

import numpy as np
import pytest

import main


def run(monkeypatch, *args):
    monkeypatch.setattr(sys, "argv", ["main.py", "--no-show", *args])
    main.main()


def test_load_csv(tmp_path):
    path = tmp_path / "points.csv"
    path.write_text("t,x,y\n0,1,2\n1,3,4\n")
    np.testing.assert_array_equal(main.load_csv(path, "x", "y"), [[1, 2], [3, 4]])
    np.testing.assert_array_equal(main.load_csv(path), [[0, 1], [1, 3]])


def test_resample_to_uniform():
    points = np.array([[0.0, 0.0], [0.0, 0.0], [1.0, 0.0], [1.0, 3.0]])
    resampled = main.resample_to_uniform(points, num=5)
    np.testing.assert_allclose(resampled, [[0, 0], [1, 0], [1, 1], [1, 2], [1, 3]])
    with pytest.raises(ValueError):
        main.resample_to_uniform(np.ones((4, 2)))


def test_prints_series(monkeypatch, capsys):
    run(monkeypatch, "--curve", "circle", "--n-terms", "1", "--samples", "201")
    out = capsys.readouterr().out
    assert "Fourier series with N=1:" in out
    assert "e^(i1t)" in out


def test_png_export(monkeypatch, tmp_path, capsys):
    png = tmp_path / "frame.png"
    run(monkeypatch, "--curve", "heart", "--n-terms", "5", "--samples", "201",
        "--media-size", "small", "--hide", "circles", "--png", str(png))
    assert png.exists()


def test_drawn_points(monkeypatch, tmp_path, capsys):
    t = np.linspace(-np.pi, np.pi, 60)
    path = tmp_path / "drawing.csv"
    path.write_text("x,y\n" + "\n".join(f"{np.cos(a)},{np.sin(a)}" for a in t))
    run(monkeypatch, "--points", str(path), "--resample", "101")
    out = capsys.readouterr().out
    assert "Too few points" not in out
    # 101 resampled points suggest N = 8
    assert "N=8" in out


def test_terms_gif(monkeypatch, tmp_path, capsys):
    terms = tmp_path / "terms.json"
    terms.write_text(json.dumps([
        {"amplitude": 0.5, "phase": 0.0, "frequencyComponent": 1, "color": [1, 0, 0, 1]},
        {"amplitude": 0.2, "phase": 1.0, "frequencyComponent": -3, "color": [0, 0, 1, 1]},
    ]))
    gif = tmp_path / "out.gif"
    run(monkeypatch, "--terms", str(terms), "--samples", "101", "--size", "72",
        "--gif", str(gif), "--frames", "3", "--duration", "1")
    out = capsys.readouterr().out
    assert "N=3" in out
    assert gif.exists()


def test_random_terms_are_saved(monkeypatch, tmp_path, capsys):
    saved = tmp_path / "random.json"
    run(monkeypatch, "--random-terms", "--save-terms", str(saved), "--samples", "101")
    assert 2 <= len(json.loads(saved.read_text())) <= 7


def test_duplicate_terms_are_rejected(monkeypatch, tmp_path):
    terms = tmp_path / "terms.json"
    terms.write_text(json.dumps([
        {"amplitude": 0.5, "phase": 0.0, "frequencyComponent": 2},
        {"amplitude": 0.1, "phase": 0.0, "frequencyComponent": 2},
    ]))
    with pytest.raises(SystemExit) as excinfo:
        run(monkeypatch, "--terms", str(terms))
    assert excinfo.value.code == 2


def test_n_terms_out_of_range(monkeypatch):
    with pytest.raises(SystemExit):
        run(monkeypatch, "--n-terms", "101")


def test_gif_export_failure_exits(monkeypatch, tmp_path):
    gif = tmp_path / "missing" / "epicycles.gif"
    with pytest.raises(SystemExit) as excinfo:
        run(monkeypatch, "--curve", "circle", "--n-terms", "1", "--samples", "101",
            "--size", "72", "--gif", str(gif), "--frames", "2", "--duration", "1")
    assert excinfo.value.code == 1
    assert not gif.exists()
