"""Tests for the CLI."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from chartgallery.cli import main


class TestCLIParsing:
    """Test CLI argument parsing."""

    def test_no_command_exits(self):
        with pytest.raises(SystemExit) as exc_info:
            with patch("sys.argv", ["chartgallery"]):
                main()
        assert exc_info.value.code == 1

    def test_list(self, capsys):
        with patch("sys.argv", ["chartgallery", "list"]):
            main()
        out = capsys.readouterr().out
        assert out.splitlines()[0] == "Basic Charts"
        assert "stream_graph" in out
        assert "3D Vector Field" in out

    def test_export_csv(self, tmp_path, capsys):
        output = tmp_path / "output.csv"
        with patch("sys.argv", [
            "chartgallery", "export-csv", "funnel",
            "-o", str(output),
            "--seed", "3",
        ]):
            main()
        assert output.exists()
        content = output.read_text()
        assert "Visitors" in content
        assert "Exported 4 funnel rows" in capsys.readouterr().out

    def test_export_csv_unknown_dataset(self, tmp_path):
        with pytest.raises(SystemExit) as exc_info:
            with patch("sys.argv", [
                "chartgallery", "export-csv", "lottery", "-o", str(tmp_path / "x.csv"),
            ]):
                main()
        assert exc_info.value.code == 2

    def test_export_html(self, tmp_path):
        pytest.importorskip("matplotlib")
        output = tmp_path / "output.html"
        with patch("sys.argv", [
            "chartgallery", "export-html",
            "-o", str(output),
            "--chart", "bar",
            "--chart", "radar",
            "--seed", "5",
        ]):
            main()
        html = output.read_text()
        assert html.count("data:image/png;base64,") == 2

    def test_export_png(self, tmp_path):
        pytest.importorskip("matplotlib")
        with patch("sys.argv", [
            "chartgallery", "export-png", "-o", str(tmp_path), "--chart", "pyramid",
        ]):
            main()
        assert (tmp_path / "pyramid.png").exists()

    def test_export_png_unknown_chart(self, tmp_path):
        with pytest.raises(SystemExit) as exc_info:
            with patch("sys.argv", [
                "chartgallery", "export-png", "-o", str(tmp_path), "--chart", "spaghetti",
            ]):
                main()
        assert exc_info.value.code == 2

    def test_serve_passes_options(self):
        with patch("sys.argv", [
            "chartgallery", "serve",
            "--port", "8080",
            "--no-browser",
            "--no-refresh",
            "--interval", "2",
            "--seed", "9",
        ]), patch("chartgallery.server.app.GalleryServer") as server_cls:
            server_cls.return_value = MagicMock()
            main()
        kwargs = server_cls.call_args.kwargs
        assert kwargs["port"] == 8080
        assert kwargs["auto_open"] is False
        assert kwargs["auto_refresh"] is False
        assert kwargs["refresh_interval"] == 2.0
        server_cls.return_value.serve.assert_called_once()
